"""Simulation harness: run one stream through the sketch and an exact counter.

For every event the harness records how far guess() strays from the
exact in-window count and what relative_error the sketch reports for
itself, so a run can confirm the epsilon guarantee holds in practice.
"""
from __future__ import annotations

import time
from dataclasses import dataclass

from exphist_lite.config import Config
from exphist_lite.histogram import ExpHist
from exphist_lite.simulation.exact import ExactWindowCounter
from exphist_lite.simulation.stream import EventStreamGenerator, StreamEvent


@dataclass(slots=True)
class SimulationResult:
    """Accuracy and cost figures from a single simulation run."""
    epsilon: float
    window_size: int
    total_events: int
    final_exact: int
    final_guess: float
    final_lower: int
    final_upper: int
    max_observed_error: float   # worst |guess - exact| / exact seen
    max_reported_error: float   # worst relative_error() the sketch claimed
    peak_buckets: int
    exact_peak_events: int
    total_time_ms: float

    @property
    def within_bound(self) -> bool:
        return self.max_observed_error <= self.epsilon


def run_events(
    events: list[StreamEvent],
    conf: Config,
) -> SimulationResult:
    """Feed `events` to an ExpHist and an ExactWindowCounter side by side."""
    hist = ExpHist.empty(conf)
    exact = ExactWindowCounter(conf.window_size)
    max_observed = 0.0
    max_reported = 0.0
    peak_buckets = 0
    exact_peak = 0

    t0 = time.perf_counter()
    for event in events:
        hist = hist.add(event.weight, event.timestamp)
        exact.add(event.weight, event.timestamp)

        if exact.total > 0:
            observed = abs(hist.guess - exact.total) / exact.total
            if observed > max_observed:
                max_observed = observed
        if hist.relative_error > max_reported:
            max_reported = hist.relative_error
        if hist.num_buckets > peak_buckets:
            peak_buckets = hist.num_buckets
        if len(exact) > exact_peak:
            exact_peak = len(exact)
    elapsed_ms = (time.perf_counter() - t0) * 1000

    return SimulationResult(
        epsilon=conf.epsilon,
        window_size=conf.window_size,
        total_events=len(events),
        final_exact=exact.total,
        final_guess=hist.guess,
        final_lower=hist.lower_bound_sum,
        final_upper=hist.upper_bound_sum,
        max_observed_error=max_observed,
        max_reported_error=max_reported,
        peak_buckets=peak_buckets,
        exact_peak_events=exact_peak,
        total_time_ms=elapsed_ms,
    )


def run_simulation(
    epsilon: float = 0.1,
    window_size: int = 1000,
    total_events: int = 10_000,
    max_gap: int = 3,
    max_weight: int = 1,
    seed: int = 42,
) -> SimulationResult:
    """Generate a seeded stream and run it through run_events()."""
    conf = Config(epsilon=epsilon, window_size=window_size)
    gen = EventStreamGenerator(seed=seed, max_gap=max_gap, max_weight=max_weight)
    return run_events(gen.generate(total_events), conf)
