"""Generic topological sort of dependency graphs (depth-first)."""

__all__ = [
    "CycleDetected",
    "DependencyGraph",
    "DuplicateIdentifier",
    "DuplicatePolicy",
    "Node",
    "NodeFileError",
    "SortError",
    "SortErrorKind",
    "UnknownDependency",
    "UnknownTarget",
    "export_to_toml",
    "load_nodes_from_toml",
    "sort",
    "sort_to_values",
    "sort_values",
    "visit",
]

from ._enums import DuplicatePolicy, SortErrorKind
from ._errors import CycleDetected, DuplicateIdentifier, SortError, UnknownDependency, UnknownTarget
from ._graph import DependencyGraph
from ._io import NodeFileError, export_to_toml, load_nodes_from_toml
from ._node import Node
from ._resolver import sort, sort_to_values, sort_values, visit
