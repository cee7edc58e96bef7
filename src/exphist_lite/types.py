"""Shared type aliases used across the package."""
from __future__ import annotations

from typing import TypeAlias

Timestamp: TypeAlias = int       # same units as Config.window_size
Exponent: TypeAlias = int        # bucket holds 2**exponent units
BucketCounts: TypeAlias = tuple[int, ...]  # index i = number of 2**i buckets
