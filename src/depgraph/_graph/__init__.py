"""Graph module providing the dependency graph and its sort.

This module contains:
- Node: A vertex with incoming and outgoing edge maps
- DependencyGraph: The mutable node registry with dependency helpers
- top_sort: Kahn's algorithm over a structural copy of a graph
"""

from ._algorithms import top_sort
from ._dependency_graph import Dependency, DependencyGraph
from ._node import Node

__all__ = ["Dependency", "DependencyGraph", "Node", "top_sort"]
