"""
Dijkstra's shortest path over a ``Graph`` with a lazy-deletion heap.

Edge costs must be non-negative. Negative costs are not detected and give
undefined results.

Ties between equal priorities pop in the order they were pushed. That only
decides which of several equally short paths is reported; the distance is
the same either way.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional

from ..errors import UnknownNode
from .priority_queue import MinPriorityQueue


def dijkstra_shortest_path(graph, source: str, target: str) -> tuple[float, List[str]]:
    """
    Single-source shortest path from ``source`` to ``target``.

    Parameters
    ----------
    graph : Graph
        Read-only weighted directed graph.
    source : str
        Origin node id.
    target : str
        Destination node id.

    Returns
    -------
    total_cost : float
        Shortest path cost (math.inf if unreachable).
    path : list of str
        Node ids from source to target; empty if unreachable.

    Raises
    ------
    UnknownNode
        If source or target is not in the graph.
    """
    if source not in graph:
        raise UnknownNode(source)
    if target not in graph:
        raise UnknownNode(target)

    dist: Dict[str, float] = {node: math.inf for node in graph.nodes}
    prev: Dict[str, Optional[str]] = {node: None for node in graph.nodes}
    dist[source] = 0.0

    queue: MinPriorityQueue[str] = MinPriorityQueue()
    queue.push(0.0, source)

    while queue:
        d, u = queue.pop()
        if d > dist[u]:
            # stale
            continue
        if u == target:
            break
        for edge in graph.edges(u):
            v = edge.target
            candidate = d + edge.cost
            if candidate < dist[v]:
                dist[v] = candidate
                prev[v] = u
                queue.push(candidate, v)

    if math.isinf(dist[target]):
        return math.inf, []

    # Reconstruct path by backtracking
    path = []
    cur: Optional[str] = target
    while cur is not None:
        path.append(cur)
        cur = prev[cur]
    path.reverse()

    return dist[target], path
