"""Exponential histogram over a sliding time window.

Answers the question: "How many events happened in the last W time
units?" without remembering every event. Events are grouped into
buckets whose sizes are powers of two; older data lives in bigger
buckets. Each bucket keeps a single representative timestamp, so the
whole structure costs O(l * log(N / l)) ints for a window holding N
events.

An ExpHist is an immutable value. step, add and with_window all return
a new ExpHist and leave the receiver untouched, so the caller decides
how updates are sequenced (and, if needed, serialized).

Error bound: only the oldest bucket can straddle the window boundary,
so the true in-window count lies in [total - last + 1, total]. guess()
is the midpoint, and with l derived from epsilon its relative error
never exceeds epsilon. The sketch never undercounts: total is an upper
bound on the true count.

References:
    Datar, Gionis, Indyk & Motwani, "Maintaining Stream Statistics
    over Sliding Windows", 2002.
"""
from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from exphist_lite import canonical
from exphist_lite.config import Config
from exphist_lite.types import BucketCounts, Exponent, Timestamp

log = logging.getLogger(__name__)

T = TypeVar("T")


def drop_expired(timestamps: Sequence[Timestamp], cutoff: Timestamp) -> tuple[Timestamp, ...]:
    """Strip the trailing run of timestamps <= cutoff.

    `timestamps` is sorted newest first, so the expired entries are
    always a suffix.
    """
    end = len(timestamps)
    while end > 0 and timestamps[end - 1] <= cutoff:
        end -= 1
    return tuple(timestamps[:end])


def rebucket(inputs: Sequence[tuple[int, T]], buckets: Sequence[Exponent]) -> tuple[T, ...]:
    """Regroup (count, payload) inputs into buckets of the given exponents.

    For each target bucket, the payload at the head of the remaining
    input becomes the bucket's payload, then 2**exp units are consumed
    from the input the same way canonical.drop consumes them. With
    inputs ordered newest first, every bucket ends up tagged with the
    newest timestamp of the group merged into it.
    """
    out: list[T] = []
    n = len(inputs)
    idx = 0
    head = inputs[0][0] if n else 0  # units left in inputs[idx]
    for exp in buckets:
        if idx >= n:
            raise ValueError(
                f"inputs exhausted after {len(out)} of {len(buckets)} buckets"
            )
        out.append(inputs[idx][1])
        to_drop = canonical.exp2_value(exp)
        while to_drop > 0 and idx < n:
            if head > to_drop:
                head -= to_drop
                to_drop = 0
            else:
                to_drop -= head
                idx += 1
                head = inputs[idx][0] if idx < n else 0
    return tuple(out)


@dataclass(frozen=True, slots=True)
class ExpHist:
    """Immutable windowed aggregate.

    conf: histogram parameters.
    sizes: bucket counts per level, index 0 = smallest (newest) buckets.
    timestamps: one representative timestamp per bucket, newest first.
        len(timestamps) == sum(sizes).
    time: timestamp of the last processed step.
    """
    conf: Config
    sizes: BucketCounts = ()
    timestamps: tuple[Timestamp, ...] = ()
    time: Timestamp = 0

    @classmethod
    def empty(cls, conf: Config) -> ExpHist:
        return cls(conf=conf)

    @classmethod
    def from_count(cls, i: int, ts: Timestamp, conf: Config) -> ExpHist:
        """A histogram pre-seeded with `i` units, all stamped `ts`."""
        if i < 0:
            raise ValueError(f"count must be >= 0, got {i}")
        sizes = canonical.from_long(i, conf.l)
        return cls(conf=conf, sizes=sizes, timestamps=(ts,) * sum(sizes), time=ts)

    # --- Updates ---

    def step(self, new_time: Timestamp) -> ExpHist:
        """Advance the clock to new_time and evict expired buckets.

        Moving backwards (or standing still) is a no-op, not an error.
        """
        if new_time <= self.time:
            return self
        return self._evict(new_time)

    def _evict(self, now: Timestamp) -> ExpHist:
        filtered = drop_expired(self.timestamps, self.conf.expiration(now))
        dropped = len(self.timestamps) - len(filtered)
        if dropped == 0:
            return dataclasses.replace(self, time=now)
        # expired data sits in the largest buckets
        sizes = canonical.drop_biggest(dropped, self.sizes[::-1])[::-1]
        log.debug("evicted %d buckets at t=%d, %d remain", dropped, now, len(filtered))
        return dataclasses.replace(self, sizes=sizes, timestamps=filtered, time=now)

    def add(self, i: int, timestamp: Timestamp) -> ExpHist:
        """Fold `i` units stamped `timestamp` into the histogram.

        A timestamp older than `time` does not evict anything and is
        still folded in at the head, as if it were the newest event.
        After that, timestamps are no longer sorted newest first, and
        a stale entry ahead of a newer one survives later steps, since
        eviction only strips the trailing run.
        """
        if i < 0:
            raise ValueError(f"weight must be >= 0, got {i}")
        stepped = self.step(timestamp)
        if i == 0:
            return stepped

        # canonical representation of the NEW total
        new_sizes = canonical.from_long(stepped.total + i, self.conf.l)

        # (3, 3, 2) expands to (1, ts), (1, ts), (1, ts), (2, ts), ... (4, ts)
        bucket_sizes = [canonical.exp2_value(exp) for exp in canonical.to_buckets(stepped.sizes)]
        inputs = [(i, timestamp), *zip(bucket_sizes, stepped.timestamps)]
        return dataclasses.replace(
            stepped,
            sizes=new_sizes,
            timestamps=rebucket(inputs, canonical.to_buckets(new_sizes)),
        )

    def inc(self, timestamp: Timestamp) -> ExpHist:
        return self.add(1, timestamp)

    def add_all(self, events: Iterable[tuple[int, Timestamp]]) -> ExpHist:
        """Fold a sequence of (weight, timestamp) events in order."""
        hist = self
        for weight, ts in events:
            hist = hist.add(weight, ts)
        return hist

    def with_window(self, new_window: int) -> ExpHist:
        """Same histogram with a new window size.

        A smaller window evicts older buckets right away. A larger one
        cannot bring back anything already evicted.
        """
        resized = dataclasses.replace(self, conf=self.conf.with_window(new_window))
        log.debug("window %d -> %d at t=%d", self.conf.window_size, new_window, self.time)
        return resized._evict(self.time)

    # --- Queries ---

    @property
    def last(self) -> int:
        """Size of the largest (oldest) bucket, 0 if empty."""
        if not self.sizes:
            return 0
        return 1 << (len(self.sizes) - 1)

    @property
    def total(self) -> int:
        return canonical.expand(self.sizes)

    @property
    def lower_bound_sum(self) -> int:
        return self.total - self.last

    @property
    def upper_bound_sum(self) -> int:
        return self.total

    @property
    def guess(self) -> float:
        """Point estimate: midpoint of the possible range of the true count."""
        total = self.total
        if total == 0:
            return 0.0
        return total - (self.last - 1) / 2.0

    @property
    def relative_error(self) -> float:
        total = self.total
        if total == 0:
            return 0.0
        last = self.last
        min_inside_window = total + 1 - last
        absolute_error = (last - 1) / 2.0
        return absolute_error / min_inside_window

    @property
    def windows(self) -> tuple[int, ...]:
        """Bucket sizes from largest to smallest."""
        return tuple(
            1 << exp
            for exp in range(len(self.sizes) - 1, -1, -1)
            for _ in range(self.sizes[exp])
        )

    @property
    def num_buckets(self) -> int:
        return len(self.timestamps)

    def memory_bytes(self) -> int:
        """Approximate payload size, counting 8 bytes per stored int."""
        return (len(self.timestamps) + len(self.sizes)) * 8
