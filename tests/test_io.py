"""Tests for node file loading and result export in depsort._io."""

import tomllib
from pathlib import Path

import pytest

from depsort import Node, NodeFileError, export_to_toml, load_nodes_from_toml, sort_values
from depsort._io import result_to_dict, toml_to_nodes

PICKAXE_TOML = """
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
"""


class TestTomlToNodes:
    def test_basic(self) -> None:
        nodes = toml_to_nodes({"nodes": {"a": {"deps": ["b"], "value": 1}, "b": {}}})
        assert nodes == [Node("a", ("b",), 1), Node("b", (), "b")]

    def test_value_defaults_to_identifier(self) -> None:
        nodes = toml_to_nodes({"nodes": {"wood": {}}})
        assert nodes[0].value == "wood"

    def test_structured_value(self) -> None:
        nodes = toml_to_nodes({"nodes": {"a": {"value": {"count": 4, "tool": True}}}})
        assert nodes[0].value == {"count": 4, "tool": True}

    def test_empty_document(self) -> None:
        assert toml_to_nodes({}) == []

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(NodeFileError, match="Invalid node file"):
            toml_to_nodes({"nodes": {"a": {"depends": ["b"]}}})

    def test_deps_must_be_strings(self) -> None:
        with pytest.raises(NodeFileError):
            toml_to_nodes({"nodes": {"a": {"deps": [1]}}})

    def test_unknown_top_level_key_rejected(self) -> None:
        with pytest.raises(NodeFileError):
            toml_to_nodes({"node": {}})


class TestLoadNodesFromToml:
    def test_loads_in_file_order(self, tmp_path: Path) -> None:
        path = tmp_path / "recipes.toml"
        path.write_text(PICKAXE_TOML)

        nodes = load_nodes_from_toml(path)

        assert [node.id for node in nodes] == ["wooden pickaxe", "planks", "sticks", "wood"]
        assert sort_values(nodes, "wooden pickaxe") == ["Wood", "Planks", "Sticks", "Pickaxe"]

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = tmp_path / "recipes.toml"
        path.write_text(PICKAXE_TOML)
        assert len(load_nodes_from_toml(str(path))) == 4

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(NodeFileError, match="not found"):
            load_nodes_from_toml(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("[nodes.a\n")
        with pytest.raises(NodeFileError, match="Invalid TOML"):
            load_nodes_from_toml(path)


class TestExport:
    def test_result_to_dict(self) -> None:
        data = result_to_dict("a", ["b", "a"], ["B", None])
        assert data == {"target": "a", "order": ["b", "a"], "values": ["B", ""]}

    def test_result_to_dict_stringifies_identifiers(self) -> None:
        data = result_to_dict(1, [2, 1], ["two", "one"])
        assert data["target"] == "1"
        assert data["order"] == ["2", "1"]

    def test_export_to_toml(self, tmp_path: Path) -> None:
        output = tmp_path / "out.toml"

        export_to_toml("wooden pickaxe", ["wood", "wooden pickaxe"], ["Wood", "Pickaxe"], output)

        with output.open("rb") as f:
            data = tomllib.load(f)
        assert data == {
            "target": "wooden pickaxe",
            "order": ["wood", "wooden pickaxe"],
            "values": ["Wood", "Pickaxe"],
        }
