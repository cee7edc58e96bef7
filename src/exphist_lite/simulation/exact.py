"""Exact sliding-window counter, kept as ground truth for the sketch.

Stores every event, so memory grows with the window population. Uses
the same expiration rule as Config: an event stamped ts is outside the
window at time now once ts <= now - window_size.
"""
from __future__ import annotations

from collections import deque

from exphist_lite.types import Timestamp


class ExactWindowCounter:
    """Deque of (timestamp, weight), oldest on the left."""

    def __init__(self, window_size: int) -> None:
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")
        self._window_size = window_size
        self._events: deque[tuple[Timestamp, int]] = deque()
        self._total = 0
        self._time: Timestamp = 0

    @property
    def total(self) -> int:
        return self._total

    @property
    def time(self) -> Timestamp:
        return self._time

    def step(self, now: Timestamp) -> None:
        if now <= self._time:
            return
        self._time = now
        cutoff = now - self._window_size
        while self._events and self._events[0][0] <= cutoff:
            _, weight = self._events.popleft()
            self._total -= weight

    def add(self, weight: int, timestamp: Timestamp) -> None:
        self.step(timestamp)
        if weight == 0:
            return
        self._events.append((timestamp, weight))
        self._total += weight

    def __len__(self) -> int:
        return len(self._events)
