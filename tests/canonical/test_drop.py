"""Tests for drop_biggest and drop."""
from __future__ import annotations

import pytest

from exphist_lite.canonical import drop, drop_biggest


class TestDropBiggest:
    def test_drop_nothing(self):
        assert drop_biggest(0, (3, 2)) == (3, 2)
        assert drop_biggest(0, ()) == ()

    def test_partial_head_digit(self):
        # most significant first: 3 biggest buckets, then 2 smaller ones
        assert drop_biggest(2, (3, 2)) == (1, 2)

    def test_whole_head_digit(self):
        assert drop_biggest(3, (3, 2)) == (2,)

    def test_spills_into_next_digit(self):
        assert drop_biggest(4, (3, 2)) == (1,)

    def test_drop_everything(self):
        assert drop_biggest(5, (3, 2)) == ()

    def test_drop_more_than_present(self):
        assert drop_biggest(10, (3, 2)) == ()
        assert drop_biggest(1, ()) == ()

    def test_removes_exact_bucket_count(self):
        rep = (1, 3, 2, 3)
        for n in range(sum(rep) + 1):
            assert sum(drop_biggest(n, rep)) == sum(rep) - n

    def test_negative(self):
        with pytest.raises(ValueError):
            drop_biggest(-1, (3, 2))


class TestDrop:
    PAIRS = ((2, "a"), (4, "b"), (1, "c"))

    def test_drop_zero(self):
        assert drop(0, self.PAIRS) == self.PAIRS

    def test_exact_pair_boundary(self):
        assert drop(2, self.PAIRS) == ((4, "b"), (1, "c"))
        assert drop(6, self.PAIRS) == ((1, "c"),)

    def test_split_keeps_payload(self):
        assert drop(3, self.PAIRS) == ((3, "b"), (1, "c"))
        assert drop(1, self.PAIRS) == ((1, "a"), (4, "b"), (1, "c"))

    def test_drop_all(self):
        assert drop(7, self.PAIRS) == ()

    def test_drop_past_end(self):
        assert drop(100, self.PAIRS) == ()
        assert drop(3, ()) == ()

    def test_remaining_count(self):
        total = sum(count for count, _ in self.PAIRS)
        for x in range(total + 1):
            rest = drop(x, self.PAIRS)
            assert sum(count for count, _ in rest) == total - x

    def test_negative(self):
        with pytest.raises(ValueError):
            drop(-2, self.PAIRS)
