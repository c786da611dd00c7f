"""Exceptions raised while resolving a dependency graph."""

from collections.abc import Hashable, Sequence

from ._enums import SortErrorKind


class SortError(ValueError):
    """Base class for every failure reported by a sort.

    Attributes:
        kind: Which failure occurred.
        identifier: The identifier that triggered the failure.

    """

    kind: SortErrorKind

    def __init__(self, identifier: Hashable, msg: str) -> None:
        self.identifier = identifier
        super().__init__(msg)


class CycleDetected(SortError):
    """Raised when the traversal re-enters a node that is still being resolved."""

    kind = SortErrorKind.CYCLE

    def __init__(self, identifier: Hashable, path: Sequence[Hashable] = ()) -> None:
        self.path = tuple(path) or (identifier, identifier)
        chain = " -> ".join(repr(p) for p in self.path)
        super().__init__(identifier, f"Cyclic dependency detected at {identifier!r}: {chain}")


class UnknownDependency(SortError):
    """Raised when a node depends on an identifier that has no node."""

    kind = SortErrorKind.UNKNOWN_DEPENDENCY

    def __init__(self, identifier: Hashable, referrer: Hashable) -> None:
        self.referrer = referrer
        super().__init__(identifier, f"Unknown dependency {identifier!r} required by {referrer!r}")


class UnknownTarget(SortError):
    """Raised when the sort target has no node."""

    kind = SortErrorKind.UNKNOWN_TARGET

    def __init__(self, identifier: Hashable) -> None:
        super().__init__(identifier, f"Target {identifier!r} not found")


class DuplicateIdentifier(SortError):
    """Raised when two input nodes share an identifier."""

    kind = SortErrorKind.DUPLICATE_IDENTIFIER

    def __init__(self, identifier: Hashable) -> None:
        super().__init__(identifier, f"Duplicate node identifier {identifier!r}")
