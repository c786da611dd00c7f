"""Tests for the depsort command line interface."""

import json
import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from depsort._cli.main import app

runner = CliRunner()

RECIPES = """
[nodes."wooden pickaxe"]
deps = ["planks", "sticks"]
value = "Pickaxe"

[nodes.planks]
deps = ["wood"]
value = "Planks"

[nodes.sticks]
deps = ["planks"]
value = "Sticks"

[nodes.wood]
value = "Wood"

[nodes.table]
deps = ["planks"]
"""

CYCLE = """
[nodes.a]
deps = ["b"]

[nodes.b]
deps = ["a"]
"""

MISSING = """
[nodes.a]
deps = ["ghost"]
"""

PARTIAL = """
[nodes.a]

[nodes.b]
deps = ["ghost"]
"""


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each test from an empty directory so no outer pyproject.toml is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _write(directory: Path, name: str, contents: str) -> Path:
    path = directory / name
    path.write_text(contents)
    return path


def _tail(output: str, count: int) -> list[str]:
    return [line.strip() for line in output.strip().splitlines()[-count:]]


class TestSortCommand:
    def test_prints_order(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["sort", str(recipes), "wooden pickaxe"])

        assert result.exit_code == 0
        assert _tail(result.stdout, 4) == ["wood", "planks", "sticks", "wooden pickaxe"]

    def test_prints_values(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["sort", str(recipes), "wooden pickaxe", "--values"])

        assert result.exit_code == 0
        assert _tail(result.stdout, 4) == ["Wood", "Planks", "Sticks", "Pickaxe"]

    def test_long_identifier_stays_on_one_line(self, workdir: Path) -> None:
        long_id = "x" * 50 + " " + "y" * 50
        graph = _write(workdir, "long.toml", f'[nodes."{long_id}"]\ndeps = ["short"]\n\n[nodes.short]\n')

        result = runner.invoke(app, ["sort", str(graph), long_id])

        assert result.exit_code == 0
        assert result.stdout.splitlines()[-2:] == ["short", long_id]

    def test_json_output(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["sort", str(recipes), "table", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout[result.stdout.index("[") :]) == ["wood", "planks", "table"]

    def test_export(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)
        output = workdir / "out.toml"

        result = runner.invoke(app, ["sort", str(recipes), "sticks", "-o", str(output)])

        assert result.exit_code == 0
        with output.open("rb") as f:
            assert tomllib.load(f) == {
                "target": "sticks",
                "order": ["wood", "planks", "sticks"],
                "values": ["Wood", "Planks", "Sticks"],
            }

    def test_cycle_exits_non_zero(self, workdir: Path) -> None:
        graph = _write(workdir, "cycle.toml", CYCLE)

        result = runner.invoke(app, ["sort", str(graph), "a"])

        assert result.exit_code == 1
        assert "Cyclic dependency" in result.output

    def test_unknown_dependency_exits_non_zero(self, workdir: Path) -> None:
        graph = _write(workdir, "missing.toml", MISSING)

        result = runner.invoke(app, ["sort", str(graph), "a"])

        assert result.exit_code == 1
        assert "Unknown dependency 'ghost'" in result.output

    def test_unknown_target_exits_non_zero(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["sort", str(recipes), "diamond"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_node_file(self, workdir: Path) -> None:
        graph = _write(workdir, "bad.toml", "[nodes.a]\nneeds = []\n")

        result = runner.invoke(app, ["sort", str(graph), "a"])

        assert result.exit_code == 1
        assert "Invalid node file" in result.output

    def test_defaults_from_config(self, workdir: Path) -> None:
        _write(workdir, "recipes.toml", RECIPES)
        _write(workdir, "pyproject.toml", '[tool.depsort]\ninput = "recipes.toml"\ntarget = "planks"\n')

        result = runner.invoke(app, ["sort"])

        assert result.exit_code == 0
        assert _tail(result.stdout, 2) == ["wood", "planks"]

    def test_missing_input_without_config(self, workdir: Path) -> None:
        result = runner.invoke(app, ["sort"])

        assert result.exit_code == 1
        assert "No node file given" in result.output

    def test_missing_target_without_config(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["sort", str(recipes)])

        assert result.exit_code == 1
        assert "No target given" in result.output

    def test_invalid_config(self, workdir: Path) -> None:
        _write(workdir, "pyproject.toml", '[tool.depsort]\nduplicates = "first"\n')

        result = runner.invoke(app, ["sort"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestCheckCommand:
    def test_valid_graph(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["check", str(recipes)])

        assert result.exit_code == 0
        assert "Graph is valid" in result.output

    def test_graph_with_cycle(self, workdir: Path) -> None:
        graph = _write(workdir, "cycle.toml", CYCLE)

        result = runner.invoke(app, ["check", str(graph)])

        assert result.exit_code == 1
        assert "Graph has problems" in result.output

    def test_graph_with_missing_dependency(self, workdir: Path) -> None:
        graph = _write(workdir, "missing.toml", MISSING)

        result = runner.invoke(app, ["check", str(graph)])

        assert result.exit_code == 1
        assert "undeclared: ghost" in result.output

    def test_target_from_config(self, workdir: Path) -> None:
        _write(workdir, "partial.toml", PARTIAL)
        _write(workdir, "pyproject.toml", '[tool.depsort]\ninput = "partial.toml"\ntarget = "a"\n')

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 0
        assert "resolves to 1 nodes" in result.output

    def test_all_ignores_configured_target(self, workdir: Path) -> None:
        _write(workdir, "partial.toml", PARTIAL)
        _write(workdir, "pyproject.toml", '[tool.depsort]\ninput = "partial.toml"\ntarget = "a"\n')

        result = runner.invoke(app, ["check", "--all"])

        assert result.exit_code == 1
        assert "undeclared: ghost" in result.output

    def test_single_target(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["check", str(recipes), "sticks"])

        assert result.exit_code == 0
        assert "resolves to 3 nodes" in result.output


class TestListCommand:
    def test_lists_nodes(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["list", str(recipes)])

        assert result.exit_code == 0
        assert "Pickaxe" in result.stdout
        assert "Total: 5 nodes" in result.stdout


class TestTreeCommand:
    def test_tree(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["tree", "wooden pickaxe", "-f", str(recipes)])

        assert result.exit_code == 0
        for name in ("wooden pickaxe", "planks", "sticks", "wood"):
            assert name in result.stdout

    def test_target_from_config(self, workdir: Path) -> None:
        _write(workdir, "recipes.toml", RECIPES)
        _write(workdir, "pyproject.toml", '[tool.depsort]\ninput = "recipes.toml"\ntarget = "sticks"\n')

        result = runner.invoke(app, ["tree"])

        assert result.exit_code == 0
        for name in ("sticks", "planks", "wood"):
            assert name in result.stdout
        assert "wooden pickaxe" not in result.stdout

    def test_missing_target_without_config(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["tree", "-f", str(recipes)])

        assert result.exit_code == 1
        assert "No target given" in result.output

    def test_unknown_target(self, workdir: Path) -> None:
        recipes = _write(workdir, "recipes.toml", RECIPES)

        result = runner.invoke(app, ["tree", "diamond", "-f", str(recipes)])

        assert result.exit_code == 1
