"""Ranges of bit positions.

A range keeps the kind of each of its bounds, so that ``5..=7``, ``5..8`` and
``5..`` can all be told apart when they are resolved against a bit width:

* an included bound is used as-is,
* an excluded bound is moved one position towards the inside of the range,
* a missing bound defaults to bit 0 (start) or bit ``n_bits - 1`` (end).

Resolved bounds are inclusive. A range whose resolved end lies before its
start is empty.
"""
from typing import Tuple, Union

import dataclasses
import enum


class BitRangeError(ValueError):
    pass


@dataclasses.dataclass(frozen=True)
class Included:
    index: int


@dataclasses.dataclass(frozen=True)
class Excluded:
    index: int


class Unbounded(enum.Enum):
    UNBOUNDED = 0


UNBOUNDED = Unbounded.UNBOUNDED

Bound = Union[Included, Excluded, Unbounded]


@dataclasses.dataclass(frozen=True)
class BitRange:
    start: Bound = UNBOUNDED
    end: Bound = UNBOUNDED

    @classmethod
    def inclusive(cls, start: int, end: int) -> "BitRange":
        return cls(Included(start), Included(end))

    @classmethod
    def half_open(cls, start: int, end: int) -> "BitRange":
        return cls(Included(start), Excluded(end))

    @classmethod
    def from_slice(cls, slice_: slice) -> "BitRange":
        if slice_.step not in (None, 1):
            raise BitRangeError(f"bit ranges must be contiguous, got step {slice_.step}")
        start: Bound = UNBOUNDED if slice_.start is None else Included(slice_.start)
        end: Bound = UNBOUNDED if slice_.stop is None else Excluded(slice_.stop)
        return cls(start, end)

    @classmethod
    def from_range(cls, range_: range) -> "BitRange":
        if range_.step != 1:
            raise BitRangeError(f"bit ranges must be contiguous, got step {range_.step}")
        return cls.half_open(range_.start, range_.stop)

    def resolve(self, n_bits: int) -> Tuple[int, int]:
        """Returns the inclusive ``(left, right)`` bounds for an n_bits wide type."""
        if isinstance(self.start, Included):
            left = self.start.index
        elif isinstance(self.start, Excluded):
            left = self.start.index + 1
        else:
            left = 0

        if isinstance(self.end, Included):
            right = self.end.index
        elif isinstance(self.end, Excluded):
            right = self.end.index - 1
        else:
            right = n_bits - 1

        return left, right

    def __str__(self) -> str:
        if isinstance(self.start, Included):
            start = str(self.start.index)
        elif isinstance(self.start, Excluded):
            # no literal syntax for an excluded start
            start = str(self.start.index + 1)
        else:
            start = ""

        if isinstance(self.end, Included):
            return f"{start}..={self.end.index}"
        elif isinstance(self.end, Excluded):
            return f"{start}..{self.end.index}"
        else:
            return f"{start}.."


RangeLike = Union[BitRange, slice, range]


def as_bit_range(range_like: RangeLike, /) -> BitRange:
    if isinstance(range_like, BitRange):
        return range_like
    elif isinstance(range_like, slice):
        return BitRange.from_slice(range_like)
    elif isinstance(range_like, range):
        return BitRange.from_range(range_like)
    else:
        raise TypeError(
            f"expected a BitRange, slice or range, got {type(range_like).__name__}"
        )
