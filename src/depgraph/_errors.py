"""Exception hierarchy for dependency graph operations."""

from typing import Literal, TypeAlias

EdgeSide: TypeAlias = Literal["from", "to", "dependent", "dependent_on"]


class DepGraphError(Exception):
    """Base class for all depgraph errors."""


class SelfReferenceError(DepGraphError):
    """Raised when an edge or dependency names the same node on both ends."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Node '{key}' cannot depend on itself")


class UnknownNodeError(DepGraphError):
    """Raised when an edge or dependency references an unregistered node.

    Attributes:
        key: The key that could not be resolved.
        side: Which end of the edge or dependency was missing.

    """

    def __init__(self, key: str, side: EdgeSide) -> None:
        self.key = key
        self.side = side
        super().__init__(f"Cannot find {side} node '{key}'")


class CycleDetectedError(DepGraphError):
    """Raised when a topological sort encounters a cycle."""

    def __init__(self, remaining: list[str]) -> None:
        self.remaining = remaining
        super().__init__(
            f"Cycle detected: {len(remaining)} node(s) left with unresolved edges: {', '.join(remaining)}",
        )


class DuplicateKeyError(DepGraphError):
    """Raised by strict graphs when a key is registered twice."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Node '{key}' is already registered")


class GraphFileError(DepGraphError):
    """Error in a graph definition file."""
