"""Mutable dependency graph keyed by node identity."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from depgraph._errors import CycleDetectedError, DuplicateKeyError, SelfReferenceError, UnknownNodeError
from depgraph._keyer import Keyer, as_keyer

from ._algorithms import top_sort
from ._node import Node

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Dependency:
    """A ``dependent`` node that must be ordered relative to ``dependent_on``.

    Translates to the graph edge ``dependent -> dependent_on``.
    """

    dependent: str
    dependent_on: str


class DependencyGraph:
    """A directed graph of keyed nodes with incoming and outgoing edges.

    Nodes are registered up front (or one by one with ``add_node``) and edges
    are added incrementally. An edge ``a -> b`` means "a depends on b".
    Nodes are never removed, and there is no public edge removal; only the
    throwaway copy made by ``top_sort`` loses edges.

    The graph carries no locking. Callers sharing one across threads must
    serialize access themselves.

    Example:
        >>> graph = DependencyGraph(["boot", "shell", "login"])
        >>> graph.add_dependencies_for_node("login", ["shell", "boot"])
        >>> graph.add_dependency(("shell", "boot"))
        >>> graph.build_order()
        ['boot', 'shell', 'login']

    """

    __slots__ = ("node_map", "strict")

    def __init__(self, nodes: Iterable[Keyer | str] = (), *, strict: bool = False) -> None:
        """Create a graph with one edgeless node per value.

        Args:
            nodes: Identity-bearing values. Plain strings are wrapped in ``StringNode``.
            strict: Reject duplicate keys with ``DuplicateKeyError`` instead of
                replacing the earlier node.

        """
        self.node_map: dict[str, Node] = {}
        self.strict = strict
        for value in nodes:
            self.add_node(value)

    @classmethod
    def from_nodes(cls, nodes: Iterable[Keyer | str], *, strict: bool = False) -> DependencyGraph:
        return cls(nodes, strict=strict)

    # ---- registry ------------------------------------------------------------

    def add_node(self, value: Keyer | str) -> Node:
        """Register a node with empty adjacency.

        Re-registering an existing key replaces the old node, dropping the
        edges attached to it, unless the graph is strict.

        Raises:
            DuplicateKeyError: If the key exists and the graph is strict.

        """
        keyer = as_keyer(value)
        key = keyer.key()

        existing = self.node_map.get(key)
        if existing is not None:
            if self.strict:
                raise DuplicateKeyError(key)
            logger.warning(f"Replacing node '{key}'; its {self._degree(existing)} edge(s) are dropped")
            self._detach(existing)

        node = Node(keyer)
        self.node_map[key] = node
        logger.debug(f"Registered node '{key}'")
        return node

    def add_edge(self, from_: Keyer | str, to: Keyer | str) -> None:
        """Add the edge ``from_ -> to``, meaning "from_ depends on to".

        Adding an edge that already exists is a no-op.

        Raises:
            SelfReferenceError: If both ends have the same key.
            UnknownNodeError: If either end is not registered.

        """
        from_key = as_keyer(from_).key()
        to_key = as_keyer(to).key()

        if from_key == to_key:
            raise SelfReferenceError(from_key)

        from_node = self.node_map.get(from_key)
        if from_node is None:
            raise UnknownNodeError(from_key, "from")
        to_node = self.node_map.get(to_key)
        if to_node is None:
            raise UnknownNodeError(to_key, "to")

        self._link(from_node, to_node)
        logger.debug(f"Added edge '{from_key}' -> '{to_key}'")

    def copy(self) -> DependencyGraph:
        """Return a structurally independent copy with the same nodes and edges.

        Node values are shared (they are treated as immutable); ``Node``
        objects and edge maps are new. Registration and edge order are kept.
        """
        other = DependencyGraph(strict=self.strict)
        for key, node in self.node_map.items():
            other.node_map[key] = Node(node.value)
        for key, node in self.node_map.items():
            source = other.node_map[key]
            for target_key in node.edges_out:
                self._link(source, other.node_map[target_key])
        return other

    @staticmethod
    def _link(from_node: Node, to_node: Node) -> None:
        from_node.add_edge_out(to_node)
        to_node.add_edge_in(from_node)

    @staticmethod
    def _detach(node: Node) -> None:
        for target in node.edges_out.values():
            target.remove_edge_in(node)
        for source in node.edges_in.values():
            source.remove_edge_out(node)
        node.edges_out.clear()
        node.edges_in.clear()

    @staticmethod
    def _degree(node: Node) -> int:
        return len(node.edges_out) + len(node.edges_in)

    # ---- dependencies --------------------------------------------------------

    def add_dependency(self, dependency: Dependency | tuple[str, str]) -> None:
        """Record that ``dependency.dependent`` depends on ``dependency.dependent_on``.

        Raises:
            UnknownNodeError: If either key is not registered (``side`` tells which).
            SelfReferenceError: If both keys are the same.

        """
        if not isinstance(dependency, Dependency):
            dependency = Dependency(*dependency)

        from_node = self.node_map.get(dependency.dependent)
        if from_node is None:
            raise UnknownNodeError(dependency.dependent, "dependent")
        to_node = self.node_map.get(dependency.dependent_on)
        if to_node is None:
            raise UnknownNodeError(dependency.dependent_on, "dependent_on")

        self.add_edge(from_node.value, to_node.value)

    def add_dependencies(self, dependencies: Iterable[Dependency | tuple[str, str]]) -> None:
        """Apply ``add_dependency`` to each entry in order.

        Stops at the first failure. Entries applied before it stay applied.
        """
        for dependency in dependencies:
            self.add_dependency(dependency)

    def add_dependencies_for_node(self, dependent_key: str, dependency_keys: Iterable[str]) -> None:
        """Record that ``dependent_key`` depends on every key in ``dependency_keys``.

        Same fail-fast, no-rollback behavior as ``add_dependencies``.
        """
        for dependency_key in dependency_keys:
            self.add_dependency(Dependency(dependent_key, dependency_key))

    # ---- ordering ------------------------------------------------------------

    def top_sort(self) -> list[str]:
        """Return node keys with every node before the nodes it depends on.

        Raises:
            CycleDetectedError: If the graph contains a cycle.

        """
        return top_sort(self)

    def build_order(self) -> list[str]:
        """Return node keys with every prerequisite before its dependents.

        Raises:
            CycleDetectedError: If the graph contains a cycle.

        """
        return top_sort(self)[::-1]

    def has_cycle(self) -> bool:
        try:
            self.top_sort()
        except CycleDetectedError:
            return True
        return False

    # ---- queries -------------------------------------------------------------

    def get(self, key: str) -> Node | None:
        return self.node_map.get(key)

    def keys(self) -> list[str]:
        return list(self.node_map)

    def edges(self) -> Iterator[tuple[str, str]]:
        """Yield every edge as ``(from_key, to_key)``."""
        for key, node in self.node_map.items():
            for target_key in node.edges_out:
                yield key, target_key

    @property
    def edge_count(self) -> int:
        return sum(len(node.edges_out) for node in self.node_map.values())

    def __len__(self) -> int:
        return len(self.node_map)

    def __iter__(self) -> Iterator[str]:
        return iter(self.node_map)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Keyer):
            return item.key() in self.node_map
        return item in self.node_map

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={len(self)}, edges={self.edge_count})"
