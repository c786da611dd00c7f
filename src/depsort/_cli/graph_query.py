"""Graph query functions for CLI commands.

This module provides pure functions for querying a dependency graph.
These are the functional core - no I/O, no Rich rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from depsort._errors import SortError

if TYPE_CHECKING:
    from depsort._graph import DependencyGraph


@dataclass(frozen=True, slots=True)
class NodeInfo:
    """Basic information about a node for listing."""

    id: str
    dependency_count: int
    dependent_count: int
    value: Any


@dataclass(frozen=True, slots=True)
class GraphReport:
    """Outcome of checking every node of a graph."""

    node_count: int
    root_count: int
    leaf_count: int
    missing: dict[str, tuple[str, ...]]
    errors: dict[str, SortError]

    @property
    def is_valid(self) -> bool:
        return not self.missing and not self.errors


@dataclass(slots=True)
class TreeNode:
    """A node in a dependency tree for rendering."""

    id: str
    children: list[TreeNode]
    missing: bool = False


def list_nodes(graph: DependencyGraph[str, Any]) -> list[NodeInfo]:
    """List the nodes of a graph in input order.

    Args:
        graph: The graph to list.

    Returns:
        List of NodeInfo, one per node.

    """
    return [
        NodeInfo(
            id=node.id,
            dependency_count=len(node.deps),
            dependent_count=len(graph.dependents(node.id)),
            value=node.value,
        )
        for node in graph.nodes
    ]


def check_graph(graph: DependencyGraph[str, Any]) -> GraphReport:
    """Sort every node of the graph and collect the failures.

    Undeclared dependencies are reported in `missing`; `errors` maps every
    other node that cannot be sorted to the first failure for it.

    Args:
        graph: The graph to check.

    Returns:
        GraphReport summarizing the graph.

    """
    missing = graph.missing_dependencies()
    errors: dict[str, SortError] = {}
    for node_id in graph:
        if node_id in missing:
            continue
        try:
            graph.sort(node_id)
        except SortError as e:
            errors[node_id] = e

    return GraphReport(
        node_count=len(graph),
        root_count=len(graph.roots()),
        leaf_count=len(graph.leaves()),
        missing=missing,
        errors=errors,
    )


def get_dependency_tree(
    graph: DependencyGraph[str, Any],
    target: str,
    *,
    invert: bool = False,
    max_depth: int | None = None,
) -> TreeNode:
    """Build a dependency tree for visualization.

    Each node appears once; later occurrences are omitted, so cycles terminate.

    Args:
        graph: The graph containing the node.
        target: The root node of the tree.
        invert: If False, show what the node depends on.
                If True, show what depends on the node (reverse dependencies).
        max_depth: Maximum depth to traverse (None for unlimited).

    Returns:
        TreeNode representing the dependency tree.

    Raises:
        UnknownTarget: If the node is not found.

    """
    graph.node(target)

    def build_tree(node_id: str, depth: int, visited: set[str]) -> TreeNode:
        children: list[TreeNode] = []

        if node_id not in graph:
            return TreeNode(id=node_id, children=children, missing=True)

        if max_depth is not None and depth >= max_depth:
            return TreeNode(id=node_id, children=children)

        # Dependents have no declaration order; sort them for consistent output
        neighbors = sorted(graph.dependents(node_id), key=str) if invert else graph.dependencies(node_id)
        for neighbor in neighbors:
            if neighbor not in visited:
                visited.add(neighbor)
                children.append(build_tree(neighbor, depth + 1, visited))

        return TreeNode(id=node_id, children=children)

    return build_tree(target, 0, {target})
