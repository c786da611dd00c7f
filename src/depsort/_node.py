"""Node records making up a dependency graph."""

from collections.abc import Hashable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node[Id: Hashable, V]:
    """A named unit with declared dependencies and an associated payload.

    Nodes reference their dependencies by identifier only; a node does not
    own the nodes it depends on.

    Attributes:
        id: Unique identifier of the node.
        deps: Identifiers this node depends on, in declaration order.
        value: Opaque payload carried alongside the node.

    Example:
        >>> Node("planks", ["wood"], "Planks")
        Node(id='planks', deps=('wood',), value='Planks')

    """

    id: Id
    deps: tuple[Id, ...] = ()
    value: V = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if isinstance(self.deps, str):
            msg = f"Node {self.id!r}: deps must be a sequence of identifiers, not a string"
            raise TypeError(msg)
        if not isinstance(self.deps, tuple):
            object.__setattr__(self, "deps", tuple(self.deps))

    def depends_on(self, identifier: Id) -> bool:
        """Check if `identifier` is a direct dependency of this node."""
        return identifier in self.deps
