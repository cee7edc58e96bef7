"""l-canonical bucket-count arithmetic.

A canonical representation encodes a non-negative integer s as a list
of bucket multiplicities, one per power-of-two level: index i holds the
number of buckets of size 2^i. Every digit except the most significant
is l or l+1; the most significant digit is in [1, l+1]. For a given
(s, l) that representation is unique and minimal, which is what bounds
an exponential histogram to O(l * log(s / l)) buckets.

For l = 2 the first few representations (least significant first) are:

    1      -> 1
    2      -> 2
    3      -> 3
    4      -> 2 1
    5      -> 3 1
    6      -> 2 2
    7      -> 3 2
    10     -> 2 2 1
    14     -> 2 2 2

Everything here is a pure function over ints and tuples.

References:
    Datar, Gionis, Indyk & Motwani, "Maintaining Stream Statistics
    over Sliding Windows", 2002.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from exphist_lite.types import BucketCounts, Exponent

T = TypeVar("T")


# --- Power-of-two buckets, carried as a plain exponent ---

def exp2_value(exp: Exponent) -> int:
    """Number of units held by a bucket of the given exponent."""
    return 1 << exp


def exp2_double(exp: Exponent) -> Exponent:
    """Exponent of the bucket formed by merging two buckets of `exp`."""
    return exp + 1


def _floor_power_of_two(x: int) -> int:
    # x > 0
    return x.bit_length() - 1


def _mod_pow2(i: int, exp: int) -> int:
    return i & ((1 << exp) - 1)


def _quotient(i: int, exp: int) -> int:
    return i >> exp


def _bit(i: int, idx: int) -> int:
    return (i >> idx) & 1


def _binarize(i: int, bits: int, offset: int) -> list[int]:
    return [offset + _bit(i, idx) for idx in range(bits)]


def _check_l(l: int) -> None:
    if l < 1:
        raise ValueError(f"l must be >= 1, got {l}")


def _split(s: int, l: int) -> tuple[int, int]:
    """Return (j, offset) for s > 0: j + 1 levels, offset past the minimum."""
    num = s + l
    denom = l + 1
    j = _floor_power_of_two(num // denom)
    return j, num - (denom << j)


def from_long(s: int, l: int) -> BucketCounts:
    """Canonical representation of s, least significant level first.

    s <= 0 gives the empty representation.
    """
    _check_l(l)
    if s <= 0:
        return ()
    j, offset = _split(s, l)
    digits = _binarize(_mod_pow2(offset, j), j, l)
    digits.append(_quotient(offset, j) + 1)
    return tuple(digits)


def last_bucket_size(s: int, l: int) -> int:
    """Most significant digit of from_long(s, l), without building it."""
    _check_l(l)
    if s <= 0:
        return 0
    j, offset = _split(s, l)
    return _quotient(offset, j) + 1


def buckets_required(s: int, l: int) -> int:
    """Total number of buckets needed to represent s."""
    return sum(from_long(s, l))


def expand(rep: Sequence[int]) -> int:
    """Turn a canonical representation back into the number it encodes."""
    return sum(count << exp for exp, count in enumerate(rep))


def to_buckets(rep: Sequence[int]) -> tuple[Exponent, ...]:
    """One exponent per individual bucket, smallest buckets first.

    len(to_buckets(rep)) == sum(rep).
    """
    return tuple(exp for exp, count in enumerate(rep) for _ in range(count))


def drop_biggest(buckets_to_drop: int, canonical: Sequence[int]) -> BucketCounts:
    """Remove `buckets_to_drop` buckets from a most-significant-first rep.

    Whole digits are consumed from the front. A digit that is only
    partly consumed keeps its remainder in place. Dropping more buckets
    than the rep holds returns ().
    """
    if buckets_to_drop < 0:
        raise ValueError(f"buckets_to_drop must be >= 0, got {buckets_to_drop}")
    remaining = buckets_to_drop
    for idx, count in enumerate(canonical):
        if remaining == 0:
            return tuple(canonical[idx:])
        diff = remaining - count
        if diff == 0:
            return tuple(canonical[idx + 1:])
        if diff < 0:
            return (-diff, *canonical[idx + 1:])
        remaining = diff
    return ()


def drop(x: int, pairs: Sequence[tuple[int, T]]) -> tuple[tuple[int, T], ...]:
    """Remove x total count-units from the head of (count, payload) pairs.

    If a pair is only partly consumed, its remainder stays at the head
    with the same payload.
    """
    if x < 0:
        raise ValueError(f"x must be >= 0, got {x}")
    remaining = x
    for idx, (count, payload) in enumerate(pairs):
        if remaining == 0:
            return tuple(pairs[idx:])
        diff = remaining - count
        if diff == 0:
            return tuple(pairs[idx + 1:])
        if diff < 0:
            return ((-diff, payload), *pairs[idx + 1:])
        remaining = diff
    return ()
