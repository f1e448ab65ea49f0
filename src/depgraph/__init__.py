"""Dependency graph with validated edges and topological ordering."""

__all__ = [
    "CycleDetectedError",
    "DepGraphError",
    "Dependency",
    "DependencyGraph",
    "DuplicateKeyError",
    "GraphFileError",
    "Keyer",
    "Node",
    "SelfReferenceError",
    "StringNode",
    "TaskNode",
    "UnknownNodeError",
    "export_order_to_toml",
    "load_graph_from_toml",
    "top_sort",
]

from ._errors import (
    CycleDetectedError,
    DepGraphError,
    DuplicateKeyError,
    GraphFileError,
    SelfReferenceError,
    UnknownNodeError,
)
from ._graph import Dependency, DependencyGraph, Node, top_sort
from ._io import export_order_to_toml, load_graph_from_toml
from ._keyer import Keyer, StringNode, TaskNode
