"""Graph vertex with incoming and outgoing adjacency."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depgraph._keyer import Keyer


@dataclass(eq=False, slots=True)
class Node:
    """A vertex of a dependency graph.

    An edge ``a -> b`` means "a depends on b". It is stored twice:
    ``b`` in ``a.edges_out`` and ``a`` in ``b.edges_in``. The helpers below
    each update one side only and must be called in pairs.

    Attributes:
        value: The identity-bearing value this node was registered with.
        edges_out: Nodes this node points to, keyed by their key.
        edges_in: Nodes pointing to this node, keyed by their key.

    """

    value: Keyer
    edges_out: dict[str, Node] = field(default_factory=dict)
    edges_in: dict[str, Node] = field(default_factory=dict)

    def key(self) -> str:
        return self.value.key()

    def add_edge_out(self, other: Node) -> None:
        self.edges_out[other.key()] = other

    def add_edge_in(self, other: Node) -> None:
        self.edges_in[other.key()] = other

    def remove_edge_out(self, other: Node) -> None:
        self.edges_out.pop(other.key(), None)

    def remove_edge_in(self, other: Node) -> None:
        self.edges_in.pop(other.key(), None)

    def __repr__(self) -> str:
        return f"Node({self.key()!r}, out={list(self.edges_out)}, in={list(self.edges_in)})"
