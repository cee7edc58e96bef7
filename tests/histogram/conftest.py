"""Shared fixtures for histogram tests."""
from __future__ import annotations

import random

import pytest

from exphist_lite.config import Config
from exphist_lite.histogram import ExpHist


SEED = 42


def assert_invariants(hist: ExpHist) -> None:
    """Structural properties that must hold after every operation."""
    assert len(hist.timestamps) == sum(hist.sizes)
    assert sum(hist.windows) == hist.total
    assert hist.lower_bound_sum <= hist.guess <= hist.upper_bound_sum
    assert 0.0 <= hist.relative_error <= hist.conf.epsilon
    cutoff = hist.conf.expiration(hist.time)
    assert all(ts > cutoff for ts in hist.timestamps)
    assert list(hist.timestamps) == sorted(hist.timestamps, reverse=True)


def random_stream(n: int, max_gap: int = 3, max_weight: int = 4, seed: int = SEED):
    """(weight, timestamp) pairs with non-decreasing timestamps."""
    rng = random.Random(seed)
    ts = 0
    events = []
    for _ in range(n):
        ts += rng.randint(0, max_gap)
        events.append((rng.randint(0, max_weight), ts))
    return events


@pytest.fixture
def conf() -> Config:
    return Config(epsilon=0.1, window_size=100)


@pytest.fixture
def small_conf() -> Config:
    # l == 1: the smallest legal bucket multiplicity
    return Config(epsilon=0.5, window_size=10)
