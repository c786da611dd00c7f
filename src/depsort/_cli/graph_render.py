"""Rich rendering utilities for graph commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from rich.console import Console

    from .graph_query import GraphReport, NodeInfo, TreeNode


def render_node_table(nodes: list[NodeInfo], console: Console) -> None:
    """Render node list as a Rich table.

    Args:
        nodes: List of NodeInfo to render.
        console: Rich Console to output to.

    """
    if not nodes:
        console.print("[dim]No nodes in the graph[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Node", style="bold")
    table.add_column("Deps", justify="right")
    table.add_column("Dependents", justify="right")
    table.add_column("Value", style="dim")

    for node in nodes:
        value_str = str(node.value)
        # Truncate long values
        if len(value_str) > 60:
            value_str = value_str[:57] + "..."
        table.add_row(
            escape(node.id),
            str(node.dependency_count),
            str(node.dependent_count),
            escape(value_str),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(nodes)} nodes[/dim]")


def render_report(report: GraphReport, title: str, console: Console) -> None:
    """Render a graph check report as a Rich panel followed by its problems."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Nodes", justify="right")
    table.add_column("Roots", justify="right", style="yellow")
    table.add_column("Leaves", justify="right", style="green")
    table.add_column("Unsortable", justify="right", style="red")
    table.add_row(
        str(report.node_count),
        str(report.root_count),
        str(report.leaf_count),
        str(len(report.errors)),
    )

    console.print(Panel(table, title=f"[bold]{escape(title)}[/bold]", border_style="cyan"))

    for node_id, deps in report.missing.items():
        names = ", ".join(escape(dep) for dep in deps)
        console.print(f"  [red]•[/red] {escape(node_id)} depends on undeclared: {names}")
    for node_id, error in report.errors.items():
        console.print(f"  [red]•[/red] {escape(node_id)}: {escape(str(error))}")


def render_tree(tree_node: TreeNode, console: Console) -> None:
    """Render a dependency tree using Rich Tree.

    Args:
        tree_node: TreeNode root to render.
        console: Rich Console to output to.

    """
    rich_tree = Tree(f"[bold]{escape(tree_node.id)}[/bold]")
    _add_tree_children(rich_tree, tree_node.children)
    console.print(rich_tree)


def _add_tree_children(parent: Tree, children: list[TreeNode]) -> None:
    """Recursively add children to a Rich Tree.

    Args:
        parent: Parent Tree node to add children to.
        children: List of TreeNode children.

    """
    for child in children:
        label = escape(child.id)
        if child.missing:
            label = f"[red]{label} (missing)[/red]"
        child_tree = parent.add(label)
        _add_tree_children(child_tree, child.children)
