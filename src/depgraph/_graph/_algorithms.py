"""Graph algorithms for dependency graph operations."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from depgraph._errors import CycleDetectedError

if TYPE_CHECKING:
    from ._dependency_graph import DependencyGraph
    from ._node import Node

logger = logging.getLogger(__name__)


def top_sort(graph: DependencyGraph) -> list[str]:
    """Sort the keys of a graph topologically (Kahn's algorithm).

    The traversal removes edges as it goes, so it runs on a structural copy
    of ``graph``; the graph passed in is left untouched.

    Every node appears before the nodes it points to: for an edge
    ``a -> b`` ("a depends on b") the result lists ``a`` before ``b``.
    Ties between independent nodes are broken by registration order.

    Args:
        graph: The graph to sort.

    Returns:
        List of node keys in topological order.

    Raises:
        CycleDetectedError: If the graph contains a cycle.

    Example:
        >>> g = DependencyGraph(["a", "b", "c"])
        >>> g.add_dependencies_for_node("c", ["b"])
        >>> g.add_dependencies_for_node("b", ["a"])
        >>> top_sort(g)
        ['c', 'b', 'a']

    """
    work = graph.copy()

    # Start with nodes nothing points to
    queue: deque[Node] = deque(node for node in work.node_map.values() if not node.edges_in)
    order: list[str] = []

    while queue:
        node = queue.popleft()
        order.append(node.key())
        for successor in node.edges_out.values():
            successor.remove_edge_in(node)
            if not successor.edges_in:
                queue.append(successor)
        node.edges_out.clear()

    # Any edge left over belongs to (or hangs off) a cycle
    remaining = [key for key, node in work.node_map.items() if node.edges_in or node.edges_out]
    if remaining:
        logger.debug(f"Sort stopped with {len(remaining)} unresolved node(s): {remaining}")
        raise CycleDetectedError(remaining)

    logger.debug(f"Sorted {len(order)} node(s): {order}")
    return order
