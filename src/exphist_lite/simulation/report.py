"""Report formatting for simulation results."""
from __future__ import annotations

from exphist_lite.histogram import ExpHist
from exphist_lite.simulation.harness import SimulationResult


def format_report(result: SimulationResult, label: str = "Simulation") -> str:
    """Format a SimulationResult as a readable report string."""
    verdict = "yes" if result.within_bound else "NO"
    lines = [
        f"=== {label} ===",
        f"epsilon:           {result.epsilon}",
        f"Window size:       {result.window_size:,}",
        f"Events:            {result.total_events:,}",
        f"Total time:        {result.total_time_ms:.1f} ms",
        f"",
        f"Final window:",
        f"  Exact count:     {result.final_exact:,}",
        f"  Guess:           {result.final_guess:,.1f}",
        f"  Bounds:          [{result.final_lower:,}, {result.final_upper:,}]",
        f"",
        f"Accuracy:",
        f"  Max observed:    {result.max_observed_error:.4f}",
        f"  Max reported:    {result.max_reported_error:.4f}",
        f"  Within epsilon:  {verdict}",
        f"",
        f"Space:",
        f"  Peak buckets:    {result.peak_buckets:,}",
        f"  Exact peak:      {result.exact_peak_events:,} events",
    ]
    return "\n".join(lines)


def format_histogram(hist: ExpHist, label: str = "Histogram") -> str:
    """Summarize the current state of a single histogram."""
    lines = [
        f"=== {label} ===",
        f"Time:              {hist.time}",
        f"Window size:       {hist.conf.window_size:,}",
        f"Guess:             {hist.guess:,.1f}",
        f"Bounds:            [{hist.lower_bound_sum:,}, {hist.upper_bound_sum:,}]",
        f"Relative error:    {hist.relative_error:.4f} (epsilon {hist.conf.epsilon})",
        f"Buckets:           {hist.num_buckets:,} ({hist.memory_bytes():,} bytes)",
    ]
    return "\n".join(lines)
