"""String enums used across depsort, with per-member docstrings."""

from enum import StrEnum
from typing import Self


class StrEnumWithDoc(StrEnum):
    """Base class for string enums with docstrings.

    Implementation based on this article: https://guicommits.com/add-docstrings-python-enum-members/
    """

    def __new__(cls, value: str, doc: str = "") -> Self:
        """Create a new enum member with a docstring."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.__doc__ = doc
        return obj


class SortErrorKind(StrEnumWithDoc):
    """Discriminator for the failures a sort can report."""

    CYCLE = "cycle", "The dependency closure of the target contains a cycle."
    UNKNOWN_DEPENDENCY = "unknown_dependency", "A reached node depends on an identifier with no node."
    UNKNOWN_TARGET = "unknown_target", "The target identifier has no node."
    DUPLICATE_IDENTIFIER = "duplicate_identifier", "Two input nodes share an identifier."


class DuplicatePolicy(StrEnumWithDoc):
    """How to index a node set in which an identifier appears more than once."""

    ERROR = "error", "Reject the node set with DuplicateIdentifier."
    LAST = "last", "The last declared node for the identifier wins."
