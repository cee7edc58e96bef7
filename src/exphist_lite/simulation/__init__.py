"""Stream simulation and ground-truth comparison for exphist-lite."""

from exphist_lite.simulation.exact import ExactWindowCounter
from exphist_lite.simulation.harness import (
    SimulationResult,
    run_events,
    run_simulation,
)
from exphist_lite.simulation.report import format_histogram, format_report
from exphist_lite.simulation.stream import EventStreamGenerator, StreamEvent

__all__ = [
    "EventStreamGenerator",
    "ExactWindowCounter",
    "SimulationResult",
    "StreamEvent",
    "format_histogram",
    "format_report",
    "run_events",
    "run_simulation",
]
