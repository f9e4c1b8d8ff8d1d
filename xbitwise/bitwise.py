"""Bit-level operations on fixed-width integers.

Each operation comes in two flavours. The ``*_unchecked`` methods trust the
caller with the bit index: shift amounts are taken modulo the width of the
type, the same as a wrapping shift on the native integer, so an index of
``n_bits + k`` behaves like ``k``. The checked methods return ``None`` for an
index outside ``[0, n_bits)`` and the unchecked result otherwise.

Operands are reduced to the integer type before use and every integer result
is a canonical value of the type, so signed results are negative when their
top bit is set::

    >>> I8.set_bit(0, 7)
    -128
    >>> U8.set_bit(0, 7)
    128
"""
from typing import Callable, Mapping, Optional, Protocol, TypeVar, Union
import typing

import dataclasses
import logging

from xbitwise.ranges import RangeLike, as_bit_range
from xbitwise.types import BitIndex, IntegerType
import xbitwise.types

logger = logging.getLogger(__name__)

T = TypeVar("T")


@typing.runtime_checkable
class BitAddressable(Protocol):
    def zero(self) -> int:
        raise NotImplementedError

    def one(self) -> int:
        raise NotImplementedError

    def bit_size(self) -> int:
        raise NotImplementedError

    def get_bit_unchecked(self, value: int, index: BitIndex, /) -> bool:
        raise NotImplementedError

    def get_bit(self, value: int, index: BitIndex, /) -> Optional[bool]:
        raise NotImplementedError

    def set_bit_unchecked(self, value: int, index: BitIndex, /) -> int:
        raise NotImplementedError

    def set_bit(self, value: int, index: BitIndex, /) -> Optional[int]:
        raise NotImplementedError

    def clear_bit_unchecked(self, value: int, index: BitIndex, /) -> int:
        raise NotImplementedError

    def clear_bit(self, value: int, index: BitIndex, /) -> Optional[int]:
        raise NotImplementedError

    def flip_bit_unchecked(self, value: int, index: BitIndex, /) -> int:
        raise NotImplementedError

    def flip_bit(self, value: int, index: BitIndex, /) -> Optional[int]:
        raise NotImplementedError

    def update_bit_unchecked(
        self, value: int, index: BitIndex, new_value: bool, /
    ) -> int:
        raise NotImplementedError

    def update_bit(
        self, value: int, index: BitIndex, new_value: bool, /
    ) -> Optional[int]:
        raise NotImplementedError

    def set_range_unchecked(self, value: int, bit_range: RangeLike, /) -> int:
        raise NotImplementedError

    def set_range(self, value: int, bit_range: RangeLike, /) -> Optional[int]:
        raise NotImplementedError

    def set_all(self, value: int, /) -> int:
        raise NotImplementedError

    def clear(self, value: int, /) -> int:
        raise NotImplementedError

    def flip(self, value: int, /) -> int:
        raise NotImplementedError

    def parity(self, value: int, /) -> bool:
        raise NotImplementedError

    def hamming_distance(self, value: int, other: int, /) -> int:
        raise NotImplementedError


def _checked(unchecked: Callable[..., T]) -> Callable[..., Optional[T]]:
    def checked(self, value, index, /, *args, unchecked=unchecked):
        if not self.is_valid_index(index):
            logger.debug(
                "%s: bit index %d out of range for %s",
                checked.__name__,
                index,
                self.integer_type,
            )
            return None
        return unchecked(self, value, index, *args)

    checked.__name__ = unchecked.__name__[: -len("_unchecked")]
    checked.__qualname__ = checked.__name__
    checked.__doc__ = (
        f"Checked version of ``{unchecked.__name__}``, "
        "returning None if the bit index is out of range."
    )

    return checked


@dataclasses.dataclass(frozen=True)
class Bitwise(BitAddressable):
    """The bit operations of one integer type."""

    integer_type: IntegerType

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def bit_size(self) -> int:
        return self.integer_type.n_bits

    def is_valid_index(self, index: int, /) -> bool:
        return 0 <= index < self.integer_type.n_bits

    def _bit(self, index: int, /) -> int:
        return 1 << (index % self.integer_type.n_bits)

    def _count_ones(self, value: int, /) -> int:
        return bin(self.integer_type.to_unsigned(value)).count("1")

    def get_bit_unchecked(self, value: int, index: BitIndex, /) -> bool:
        mask = self._bit(index)
        return (self.integer_type.to_unsigned(value) & mask) == mask

    def set_bit_unchecked(self, value: int, index: BitIndex, /) -> int:
        return self.integer_type.wrap(value | self._bit(index))

    def clear_bit_unchecked(self, value: int, index: BitIndex, /) -> int:
        return self.integer_type.wrap(value & ~self._bit(index))

    def flip_bit_unchecked(self, value: int, index: BitIndex, /) -> int:
        return self.integer_type.wrap(value ^ self._bit(index))

    def update_bit_unchecked(
        self, value: int, index: BitIndex, new_value: bool, /
    ) -> int:
        if new_value:
            return self.set_bit_unchecked(value, index)
        else:
            return self.clear_bit_unchecked(value, index)

    get_bit = _checked(get_bit_unchecked)
    set_bit = _checked(set_bit_unchecked)
    clear_bit = _checked(clear_bit_unchecked)
    flip_bit = _checked(flip_bit_unchecked)
    update_bit = _checked(update_bit_unchecked)

    def set_range_unchecked(self, value: int, bit_range: RangeLike, /) -> int:
        """Sets every bit of an inclusive-resolved range, leaving the others.

        An empty range returns the value unchanged.
        """
        left, right = as_bit_range(bit_range).resolve(self.integer_type.n_bits)
        if right < left:
            return self.integer_type.wrap(value)

        mask = ((self._bit(left) - 1) ^ (self._bit(right) - 1)) | self._bit(right)
        return self.integer_type.wrap(value | mask)

    def set_range(self, value: int, bit_range: RangeLike, /) -> Optional[int]:
        """Checked version of ``set_range_unchecked``.

        Returns None unless both resolved bounds are bit indices of the type.
        The only empty range accepted is one that ends just before its start,
        such as ``3..3``; inverted ranges such as ``7..=5`` return None.
        """
        bit_range = as_bit_range(bit_range)
        left, right = bit_range.resolve(self.integer_type.n_bits)
        if not (
            self.is_valid_index(left) and left - 1 <= right < self.integer_type.n_bits
        ):
            logger.debug(
                "set_range: bit range %s out of range for %s",
                bit_range,
                self.integer_type,
            )
            return None
        return self.set_range_unchecked(value, bit_range)

    def set_all(self, value: int, /) -> int:
        return self.flip(self.clear(value))

    def clear(self, value: int, /) -> int:
        return self.integer_type.wrap(value & 0)

    def flip(self, value: int, /) -> int:
        return self.integer_type.wrap(~value)

    def parity(self, value: int, /) -> bool:
        """True if an odd number of bits are set."""
        return (self._count_ones(value) & 1) == 1

    def hamming_distance(self, value: int, other: int, /) -> int:
        """The number of bit positions at which value and other differ."""
        return self._count_ones(value ^ other)


BITWISE: Mapping[str, Bitwise] = {
    name: Bitwise(integer_type)
    for name, integer_type in xbitwise.types.INTEGER_TYPES.items()
}

I8 = BITWISE["i8"]
I16 = BITWISE["i16"]
I32 = BITWISE["i32"]
I64 = BITWISE["i64"]
I128 = BITWISE["i128"]

U8 = BITWISE["u8"]
U16 = BITWISE["u16"]
U32 = BITWISE["u32"]
U64 = BITWISE["u64"]
U128 = BITWISE["u128"]


def for_type(integer_type: Union[IntegerType, str], /) -> Bitwise:
    if isinstance(integer_type, IntegerType):
        integer_type = integer_type.name
    return BITWISE[xbitwise.types.lookup(integer_type).name]
