"""Accuracy of the windowed estimate against exact counts."""
from __future__ import annotations

from exphist_lite.config import Config
from exphist_lite.histogram import ExpHist
from tests.histogram.conftest import assert_invariants


class TestUnitStream:
    def test_one_event_per_tick(self):
        """epsilon=0.1, window=100, inc(t) for t in 0..199."""
        conf = Config(epsilon=0.1, window_size=100)
        hist = ExpHist.empty(conf)
        for t in range(200):
            hist = hist.inc(t)
            assert hist.relative_error <= 0.1
            assert_invariants(hist)

        # events with timestamp > 99
        true_count = 100
        assert abs(hist.guess - true_count) <= 0.1 * true_count
        assert hist.lower_bound_sum <= true_count <= hist.upper_bound_sum

    def test_never_undercounts(self):
        conf = Config(epsilon=0.2, window_size=50)
        hist = ExpHist.empty(conf)
        for t in range(1, 400):
            hist = hist.inc(t)
            true_count = min(t, conf.window_size)
            assert hist.upper_bound_sum >= true_count

    def test_tracks_window_over_time(self):
        conf = Config(epsilon=0.05, window_size=250)
        hist = ExpHist.empty(conf)
        for t in range(1, 1001):
            hist = hist.inc(t)
            true_count = min(t, conf.window_size)
            assert abs(hist.guess - true_count) <= conf.epsilon * true_count
