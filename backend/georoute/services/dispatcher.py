"""
Round-robin load balancer in front of the regional backends.

The counter is the only mutable state shared between requests. It advances
once per dispatched request, whatever the outcome, and is only rewound by an
explicit ``reset()``.
"""

from __future__ import annotations

import threading

import numpy as np

from ..errors import NoBackendsAvailable


class Dispatcher:
    def __init__(self, start: int = 0, rng: np.random.Generator | None = None):
        self._counter = start
        self._lock = threading.Lock()
        self._rng = rng if rng is not None else np.random.default_rng()

    @property
    def counter(self) -> int:
        return self._counter

    def select_backend(self, backend_count: int) -> int:
        """Return ``counter % backend_count`` and advance the counter in one step."""
        if backend_count < 1:
            raise NoBackendsAvailable(f"Need at least one backend, got {backend_count}")
        with self._lock:
            index = self._counter % backend_count
            self._counter += 1
        return index

    def reset(self, value: int = 0) -> None:
        """Administrative reset of the round-robin position."""
        with self._lock:
            self._counter = value

    def should_fail(self, failure_rate: float) -> bool:
        return bool(self._rng.random() < failure_rate)

    def delay_seconds(self, latency_ms: float, jitter_ms: float) -> float:
        return (latency_ms + self._rng.random() * jitter_ms) / 1000.0
