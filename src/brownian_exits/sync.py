"""Shared state between worker threads: atomic counters and the segment sink."""

from __future__ import annotations

import threading
from typing import Iterable, List

from .segments import Segment


class AtomicCounter:
    """
    Monotonic integer counter with fetch-and-add.

    Used both as the global exit budget and as the path id allocator.
    """

    def __init__(self, start: int = 0):
        self._value = int(start)
        self._lock = threading.Lock()

    def fetch_add(self, delta: int = 1) -> int:
        """Atomically add ``delta`` and return the value before the addition."""
        with self._lock:
            previous = self._value
            self._value += delta
            return previous

    def peek(self) -> int:
        # Unsynchronized read; may be stale relative to concurrent fetch_add.
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"


class SegmentSink:
    """Append-only collection of segments guarded by a single lock."""

    def __init__(self):
        self._segments: List[Segment] = []
        self._lock = threading.Lock()

    def append(self, segment: Segment) -> None:
        with self._lock:
            self._segments.append(segment)

    def extend(self, segments: Iterable[Segment]) -> None:
        """Append a worker-local buffer in one locked operation."""
        with self._lock:
            self._segments.extend(segments)

    def snapshot(self) -> List[Segment]:
        with self._lock:
            return list(self._segments)

    def __len__(self) -> int:
        with self._lock:
            return len(self._segments)
