"""Shortest-path search used by every regional backend."""

from .dijkstra import dijkstra_shortest_path
from .priority_queue import MinPriorityQueue

__all__ = [
    "dijkstra_shortest_path",
    "MinPriorityQueue",
]
