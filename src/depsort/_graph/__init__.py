"""Graph module providing dependency resolution.

This module contains:
- DependencyGraph[Id, V]: An immutable node set indexed by identifier
- resolve: Depth-first, dependency-first traversal of a target's closure
"""

from ._algorithms import closure, index_nodes, resolve
from ._dependency_graph import DependencyGraph

__all__ = ["DependencyGraph", "closure", "index_nodes", "resolve"]
