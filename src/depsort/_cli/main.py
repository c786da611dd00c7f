import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from depsort._errors import CycleDetected, SortError, UnknownDependency
from depsort._graph import DependencyGraph
from depsort._io import NodeFileError, export_to_toml, load_nodes_from_toml

from .config import ConfigError, DepsortConfig, get_config
from .graph_query import check_graph, get_dependency_tree, list_nodes
from .graph_render import render_node_table, render_report, render_tree

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Depsort CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> DepsortConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _resolve_input(file: Path | None, config: DepsortConfig) -> Path:
    if file is not None:
        return file
    if config.input is not None:
        logger.debug(f"Using node file from config: {config.input}")
        return config.input
    err_console.print("[red]Error: No node file given and no [tool.depsort].input configured[/red]")
    raise typer.Exit(code=1)


def _resolve_target(target: str | None, config: DepsortConfig) -> str:
    if target is not None:
        return target
    if config.target is not None:
        logger.debug(f"Using target from config: {config.target}")
        return config.target
    err_console.print("[red]Error: No target given and no [tool.depsort].target configured[/red]")
    raise typer.Exit(code=1)


def _load_graph(file: Path, config: DepsortConfig) -> DependencyGraph[str, Any]:
    err_console.print(f"[cyan]Loading nodes from:[/cyan] {file}")
    try:
        nodes = load_nodes_from_toml(file)
        return DependencyGraph.from_nodes(nodes, config.duplicates)
    except (NodeFileError, SortError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _print_sort_error(error: SortError) -> None:
    err_console.print(f"[red]✗ {escape(str(error))}[/red]")
    match error:
        case CycleDetected(path=path):
            err_console.print(f"  [dim]Cycle: {escape(' -> '.join(str(p) for p in path))}[/dim]")
        case UnknownDependency(referrer=referrer):
            err_console.print(f"  [dim]Declare a node for it or remove it from '{escape(str(referrer))}'[/dim]")
        case _:
            pass


@app.command()
def sort(
    file: Annotated[
        Path | None,
        typer.Argument(help="Path to the TOML node file (defaults to [tool.depsort].input)"),
    ] = None,
    target: Annotated[
        str | None,
        typer.Argument(help="Node to resolve (defaults to [tool.depsort].target)"),
    ] = None,
    *,
    values: Annotated[
        bool,
        typer.Option("--values", help="Print node values instead of identifiers"),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as a JSON array"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
) -> None:
    """Print the resolution order of a target, dependencies first."""
    config = _load_config()
    graph = _load_graph(_resolve_input(file, config), config)
    target = _resolve_target(target, config)

    err_console.print(f"[cyan]Target:[/cyan] [bold]{escape(target)}[/bold]")
    try:
        order = graph.sort(target)
    except SortError as e:
        _print_sort_error(e)
        raise typer.Exit(code=1) from e
    payloads = [graph.node(node_id).value for node_id in order]

    result: list[Any] = payloads if values else order
    if as_json:
        out_console.print_json(json.dumps(result, default=str))
    else:
        for item in result:
            out_console.print(escape(str(item)), highlight=False, soft_wrap=True)

    if output is not None:
        export_to_toml(target, order, payloads, output)
        err_console.print(f"[green]✓ Result exported to {output}[/green]")


@app.command()
def check(
    file: Annotated[
        Path | None,
        typer.Argument(help="Path to the TOML node file (defaults to [tool.depsort].input)"),
    ] = None,
    target: Annotated[
        str | None,
        typer.Argument(help="Only check this node's dependency closure (defaults to [tool.depsort].target)"),
    ] = None,
    *,
    check_all: Annotated[
        bool,
        typer.Option("--all", help="Check every node, ignoring the configured target"),
    ] = False,
) -> None:
    """Check that nodes can be sorted without performing any output."""
    config = _load_config()
    input_path = _resolve_input(file, config)
    graph = _load_graph(input_path, config)
    err_console.print()

    if target is None and not check_all:
        target = config.target

    if target is not None:
        try:
            order = graph.sort(target)
        except SortError as e:
            _print_sort_error(e)
            raise typer.Exit(code=1) from e
        err_console.print(f"[green]✓ '{escape(target)}' resolves to {len(order)} nodes[/green]")
        return

    report = check_graph(graph)
    render_report(report, str(input_path), err_console)
    err_console.print()
    if not report.is_valid:
        err_console.print("[red]✗ Graph has problems[/red]")
        raise typer.Exit(code=1)
    err_console.print("[green]✓ Graph is valid[/green]")


@app.command(name="list")
def list_(
    file: Annotated[
        Path | None,
        typer.Argument(help="Path to the TOML node file (defaults to [tool.depsort].input)"),
    ] = None,
) -> None:
    """List the nodes of a node file."""
    config = _load_config()
    graph = _load_graph(_resolve_input(file, config), config)
    render_node_table(list_nodes(graph), out_console)


@app.command()
def tree(
    target: Annotated[
        str | None,
        typer.Argument(help="Node at the root of the tree (defaults to [tool.depsort].target)"),
    ] = None,
    file: Annotated[
        Path | None,
        typer.Option("-f", "--file", help="Path to the TOML node file (defaults to [tool.depsort].input)"),
    ] = None,
    *,
    invert: Annotated[
        bool,
        typer.Option("--invert", help="Show what depends on the node instead"),
    ] = False,
    depth: Annotated[
        int | None,
        typer.Option("--depth", help="Maximum depth to display"),
    ] = None,
) -> None:
    """Show the dependency tree of a node."""
    config = _load_config()
    graph = _load_graph(_resolve_input(file, config), config)
    target = _resolve_target(target, config)

    try:
        tree_node = get_dependency_tree(graph, target, invert=invert, max_depth=depth)
    except SortError as e:
        _print_sort_error(e)
        raise typer.Exit(code=1) from e
    render_tree(tree_node, out_console)


def main() -> None:
    app()
