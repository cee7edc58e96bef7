"""Synthetic event streams for exercising the histogram.

Traffic pattern:
  - timestamps are non-decreasing; each gap is drawn uniformly from
    [0, max_gap], so bursts of same-timestamp events happen when
    max_gap is small
  - weights are drawn uniformly from [1, max_weight]

The generator is seeded so every run is reproducible.
"""
from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass

from exphist_lite.types import Timestamp


@dataclass(frozen=True, slots=True)
class StreamEvent:
    """One timestamped, weighted event."""
    timestamp: Timestamp
    weight: int = 1


class EventStreamGenerator:
    """Generate reproducible timestamped event streams."""

    __slots__ = ("_rng", "_max_gap", "_max_weight", "_start")

    def __init__(
        self,
        seed: int = 42,
        max_gap: int = 3,
        max_weight: int = 1,
        start: Timestamp = 0,
    ) -> None:
        if max_gap < 0:
            raise ValueError(f"max_gap must be >= 0, got {max_gap}")
        if max_weight < 1:
            raise ValueError(f"max_weight must be >= 1, got {max_weight}")
        self._rng = random.Random(seed)
        self._max_gap = max_gap
        self._max_weight = max_weight
        self._start = start

    def events(self, n: int) -> Iterator[StreamEvent]:
        ts = self._start
        for _ in range(n):
            ts += self._rng.randint(0, self._max_gap)
            yield StreamEvent(timestamp=ts, weight=self._rng.randint(1, self._max_weight))

    def generate(self, n: int) -> list[StreamEvent]:
        return list(self.events(n))
