"""
Binary-heap min-priority queue over ``(priority, item)`` pairs.

There is no decrease-key: callers push a new entry when a priority improves
and skip stale entries when they are popped.

Equal priorities pop in insertion order. Items are never compared, so they
need not be orderable.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Generic, List, Tuple, TypeVar

T = TypeVar("T")


class MinPriorityQueue(Generic[T]):
    def __init__(self):
        self._heap: List[Tuple[float, int, T]] = []
        self._seq = itertools.count()

    def push(self, priority: float, item: T) -> None:
        heapq.heappush(self._heap, (priority, next(self._seq), item))

    def pop(self) -> Tuple[float, T]:
        """Remove and return the ``(priority, item)`` pair with the lowest priority."""
        if not self._heap:
            raise IndexError("pop from empty priority queue")
        priority, _, item = heapq.heappop(self._heap)
        return priority, item

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
