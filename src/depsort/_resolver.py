"""Topological sort of a node set towards a single target."""

from collections.abc import Callable, Hashable, Iterable

from ._enums import DuplicatePolicy
from ._graph import index_nodes, resolve
from ._node import Node


def visit[Id: Hashable, V](
    nodes: Iterable[Node[Id, V]],
    target: Id,
    callback: Callable[[Node[Id, V]], None],
    *,
    duplicates: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> None:
    """Call `callback` with nodes in topological order, ending on the node `target`.

    Only the target and the nodes it transitively depends on are visited.

    Example:
        >>> out = []
        >>> visit([Node("cat", ["dog"], "Garfield"), Node("dog", [], "Odie")], "cat", lambda n: out.append(n.id))
        >>> out
        ['dog', 'cat']

    """
    resolve(index_nodes(nodes, duplicates), target, callback)


def sort[Id: Hashable, V](
    nodes: Iterable[Node[Id, V]],
    target: Id,
    *,
    duplicates: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> list[Id]:
    """Sort the target's dependency closure topologically.

    Args:
        nodes: Nodes in any order. Nodes the target does not depend on are ignored.
        target: Identifier of the node to resolve.
        duplicates: What to do when an identifier appears more than once.

    Returns:
        Identifiers of the target and everything it transitively depends on,
        dependencies before dependents, ending on the target.

    Raises:
        UnknownTarget: If there is no node for `target`.
        UnknownDependency: If a reached node depends on an identifier without a node.
        CycleDetected: If the closure of `target` contains a cycle.
        DuplicateIdentifier: If an identifier repeats and `duplicates` is ERROR.

    Example:
        >>> sort([Node("b", ["a"]), Node("a"), Node("c", ["a"])], "b")
        ['a', 'b']

    """
    order: list[Id] = []
    visit(nodes, target, lambda node: order.append(node.id), duplicates=duplicates)
    return order


def sort_values[Id: Hashable, V](
    nodes: Iterable[Node[Id, V]],
    target: Id,
    *,
    duplicates: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> list[V]:
    """Like `sort`, but return the payload of each node instead of its identifier.

    Example:
        >>> sort_values(
        ...     [
        ...         Node("wooden pickaxe", ["planks", "sticks"], "Pickaxe"),
        ...         Node("planks", ["wood"], "Planks"),
        ...         Node("sticks", ["planks"], "Sticks"),
        ...         Node("wood", [], "Wood"),
        ...     ],
        ...     "wooden pickaxe",
        ... )
        ['Wood', 'Planks', 'Sticks', 'Pickaxe']

    """
    values: list[V] = []
    visit(nodes, target, lambda node: values.append(node.value), duplicates=duplicates)
    return values


sort_to_values = sort_values
