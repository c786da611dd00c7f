"""Indexed, immutable view over a node set."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Hashable, Iterable, Iterator
from dataclasses import dataclass, field

from depsort._enums import DuplicatePolicy
from depsort._errors import UnknownTarget
from depsort._node import Node

from ._algorithms import closure, index_nodes, resolve


@dataclass(frozen=True, slots=True)
class DependencyGraph[Id: Hashable, V]:
    """A node set indexed by identifier, ready to be sorted repeatedly.

    The graph represents "depends on" relationships:
    - dependencies(b) = ("a",) means "b depends on a"
    - dependents(a) = {"b"} means "a is depended on by b"

    Dependencies may name identifiers that have no node; such edges are kept
    and only reported when a sort reaches them (see `missing_dependencies`).

    Attributes:
        _nodes: Mapping from identifier to node, in input order.
        _dependents: Mapping from identifier to identifiers that depend on it.

    """

    _nodes: dict[Id, Node[Id, V]] = field(default_factory=dict)
    _dependents: dict[Id, frozenset[Id]] = field(default_factory=dict)

    @classmethod
    def from_nodes(
        cls,
        nodes: Iterable[Node[Id, V]],
        duplicates: DuplicatePolicy = DuplicatePolicy.ERROR,
    ) -> DependencyGraph[Id, V]:
        """Build a graph from nodes.

        Args:
            nodes: Nodes in any order.
            duplicates: What to do when an identifier appears more than once.

        Returns:
            A new DependencyGraph instance.

        Raises:
            DuplicateIdentifier: If an identifier repeats and `duplicates` is ERROR.

        Example:
            >>> graph = DependencyGraph.from_nodes([Node("b", ["a"]), Node("a")])
            >>> graph.dependents("a")
            frozenset({'b'})

        """
        index = index_nodes(nodes, duplicates)

        dependents: defaultdict[Id, set[Id]] = defaultdict(set)
        for node in index.values():
            for dep in node.deps:
                dependents[dep].add(node.id)

        return cls(
            _nodes=index,
            _dependents={k: frozenset(v) for k, v in dependents.items()},
        )

    @property
    def nodes(self) -> tuple[Node[Id, V], ...]:
        """All nodes in the graph, in input order."""
        return tuple(self._nodes.values())

    def node(self, identifier: Id) -> Node[Id, V]:
        """Get the node with the given identifier.

        Raises:
            UnknownTarget: If there is no such node.

        """
        try:
            return self._nodes[identifier]
        except KeyError:
            raise UnknownTarget(identifier) from None

    def dependencies(self, identifier: Id) -> tuple[Id, ...]:
        """Get direct dependencies of a node, in declaration order.

        Returns an empty tuple for identifiers without a node.
        """
        node = self._nodes.get(identifier)
        return node.deps if node is not None else ()

    def dependents(self, identifier: Id) -> frozenset[Id]:
        """Get direct dependents of a node (nodes that depend on it)."""
        return self._dependents.get(identifier, frozenset())

    def roots(self) -> frozenset[Id]:
        """Get nodes with no dependencies."""
        return frozenset(n.id for n in self._nodes.values() if not n.deps)

    def leaves(self) -> frozenset[Id]:
        """Get nodes that nothing depends on."""
        return frozenset(n for n in self._nodes if not self._dependents.get(n))

    def closure(self, target: Id) -> frozenset[Id]:
        """Get the target and everything it transitively depends on.

        Raises:
            UnknownTarget: If there is no node for `target`.

        """
        return closure(self._nodes, target)

    def missing_dependencies(self) -> dict[Id, tuple[Id, ...]]:
        """Map each node to the dependencies it declares that have no node.

        Nodes without missing dependencies are omitted.
        """
        missing: dict[Id, tuple[Id, ...]] = {}
        for node in self._nodes.values():
            absent = tuple(dep for dep in node.deps if dep not in self._nodes)
            if absent:
                missing[node.id] = absent
        return missing

    def visit(self, target: Id, callback: Callable[[Node[Id, V]], None]) -> None:
        """Call `callback` with the target's closure in topological order.

        Raises:
            UnknownTarget: If there is no node for `target`.
            UnknownDependency: If a reached node depends on an identifier without a node.
            CycleDetected: If the closure of `target` contains a cycle.

        """
        resolve(self._nodes, target, callback)

    def sort(self, target: Id) -> list[Id]:
        """Return the target's closure in topological order, ending on the target."""
        order: list[Id] = []
        self.visit(target, lambda node: order.append(node.id))
        return order

    def sort_values(self, target: Id) -> list[V]:
        """Return the payloads of `sort(target)`, in the same order."""
        values: list[V] = []
        self.visit(target, lambda node: values.append(node.value))
        return values

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, identifier: object) -> bool:
        """Check if there is a node for the identifier."""
        return identifier in self._nodes

    def __iter__(self) -> Iterator[Id]:
        """Iterate over node identifiers in input order."""
        return iter(self._nodes)
