"""Graph algorithms for resolving a target's dependency closure."""

import logging
from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping
from enum import Enum, auto

from depsort._enums import DuplicatePolicy
from depsort._errors import CycleDetected, DuplicateIdentifier, UnknownDependency, UnknownTarget
from depsort._node import Node

logger = logging.getLogger(__name__)


class _Mark(Enum):
    IN_PROGRESS = auto()
    DONE = auto()


def index_nodes[Id: Hashable, V](
    nodes: Iterable[Node[Id, V]],
    duplicates: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> dict[Id, Node[Id, V]]:
    """Index nodes by identifier, keeping input order.

    Args:
        nodes: Nodes in any order.
        duplicates: What to do when an identifier appears more than once.

    Returns:
        Mapping from identifier to node.

    Raises:
        DuplicateIdentifier: If an identifier repeats and `duplicates` is ERROR.

    """
    index: dict[Id, Node[Id, V]] = {}
    for node in nodes:
        if node.id in index and duplicates == DuplicatePolicy.ERROR:
            raise DuplicateIdentifier(node.id)
        index[node.id] = node
    return index


def resolve[Id: Hashable, V](
    index: Mapping[Id, Node[Id, V]],
    target: Id,
    callback: Callable[[Node[Id, V]], None],
) -> None:
    """Call `callback` with every node of the target's closure in topological order.

    Traversal is depth-first: before a node is emitted, its not yet emitted
    dependencies are emitted in declaration order. The target is emitted last.
    An explicit stack of (identifier, dependency iterator) frames stands in for
    recursion so chain depth is not bounded by the interpreter's recursion limit.

    Args:
        index: Mapping from identifier to node.
        target: Identifier whose closure is resolved.
        callback: Called once per node, dependencies first.

    Raises:
        UnknownTarget: If `target` is not in `index`.
        UnknownDependency: If a reached node depends on an identifier not in `index`.
        CycleDetected: If the closure of `target` contains a cycle.

    """
    if target not in index:
        raise UnknownTarget(target)

    marks: dict[Id, _Mark] = {target: _Mark.IN_PROGRESS}
    stack: list[tuple[Id, Iterator[Id]]] = [(target, iter(index[target].deps))]

    while stack:
        current, pending = stack[-1]
        for dep in pending:
            mark = marks.get(dep)
            if mark is _Mark.DONE:
                continue
            if mark is _Mark.IN_PROGRESS:
                path = [frame_id for frame_id, _ in stack]
                raise CycleDetected(dep, [*path[path.index(dep) :], dep])
            if dep not in index:
                raise UnknownDependency(dep, referrer=current)
            marks[dep] = _Mark.IN_PROGRESS
            stack.append((dep, iter(index[dep].deps)))
            break
        else:
            stack.pop()
            marks[current] = _Mark.DONE
            callback(index[current])

    logger.debug("Resolved %d nodes for target %r", len(marks), target)


def closure[Id: Hashable, V](index: Mapping[Id, Node[Id, V]], target: Id) -> frozenset[Id]:
    """Collect the identifiers reachable from `target`, target included.

    Unlike `resolve`, cycles are tolerated and identifiers without a node are
    included but not expanded.

    Raises:
        UnknownTarget: If `target` is not in `index`.

    """
    if target not in index:
        raise UnknownTarget(target)

    visited: set[Id] = set()
    stack = [target]
    while stack:
        current = stack.pop()
        if current not in visited:
            visited.add(current)
            node = index.get(current)
            if node is not None:
                stack.extend(node.deps)
    return frozenset(visited)
