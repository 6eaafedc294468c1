from __future__ import annotations

import threading
from collections import deque
from datetime import datetime, timezone
from typing import List

from ..models.route import ActivityEntry


class ActivityLog:
    """Bounded, newest-first log of what the routing service did."""

    def __init__(self, max_entries: int = 50, echo: bool = True):
        self._entries: deque[ActivityEntry] = deque(maxlen=max_entries)
        self._lock = threading.Lock()
        self.echo = echo

    def add(self, text: str, tag: str = "INFO") -> ActivityEntry:
        entry = ActivityEntry(t=datetime.now(timezone.utc).isoformat(), text=text)
        with self._lock:
            self._entries.appendleft(entry)
        if self.echo:
            print(f"[{tag}] {text}", flush=True)
        return entry

    def entries(self) -> List[ActivityEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        """Drop all entries. Does not touch the dispatcher."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
