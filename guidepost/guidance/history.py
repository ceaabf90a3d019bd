"""
Bounded history buffers.

A BoundedHistory keeps the most recent `capacity` items in arrival order;
once full, the oldest entry is dropped silently on each append. Appends
come from the guidance loop while hosts read from other threads, so reads
return copies rather than live references.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, List, Optional, TypeVar

T = TypeVar("T")


GUIDANCE_HISTORY_CAPACITY = 50
OBSERVATION_HISTORY_CAPACITY = 20


class BoundedHistory(Generic[T]):
    """Thread-safe FIFO with a fixed capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._items: Deque[T] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._items.maxlen or 0

    def append(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def latest(self) -> Optional[T]:
        with self._lock:
            return self._items[-1] if self._items else None

    def snapshot(self, limit: Optional[int] = None) -> List[T]:
        """
        Return the most recent `limit` entries, oldest first.

        `None` returns everything; a non-positive limit returns nothing.
        """
        with self._lock:
            items = list(self._items)
        if limit is None:
            return items
        if limit <= 0:
            return []
        return items[-limit:]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


__all__ = [
    "GUIDANCE_HISTORY_CAPACITY",
    "OBSERVATION_HISTORY_CAPACITY",
    "BoundedHistory",
]
