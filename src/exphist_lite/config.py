"""Config -- the two knobs of an exponential histogram.

epsilon bounds the relative error of the estimate, window_size is the
length of the sliding window in timestamp units. Everything else (the
per-level bucket multiplicity l) is derived from them.
"""
from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass

from exphist_lite.types import Timestamp


def div2_ceil(x: int) -> int:
    """Same as math.ceil(x / 2) for ints, without going through floats."""
    return (x >> 1) + (x & 1)


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable histogram parameters.

    epsilon: maximum tolerated relative error, > 0.
    window_size: window length in the same units as timestamps, > 0.
    """
    epsilon: float
    window_size: int

    def __post_init__(self) -> None:
        if not (self.epsilon > 0 and math.isfinite(self.epsilon)):
            raise ValueError(f"epsilon must be a positive finite number, got {self.epsilon}")
        if self.window_size <= 0:
            raise ValueError(f"window_size must be positive, got {self.window_size}")

    @property
    def l(self) -> int:
        """Minimum number of buckets kept per size level.

        Keeping at least ceil(ceil(1/epsilon) / 2) buckets of every size
        below the largest caps the relative error at epsilon.
        """
        return div2_ceil(math.ceil(1 / self.epsilon))

    def expiration(self, now: Timestamp) -> Timestamp:
        """Last timestamp before the window; any ts <= this is outside."""
        return now - self.window_size

    def with_window(self, window_size: int) -> Config:
        return dataclasses.replace(self, window_size=window_size)
