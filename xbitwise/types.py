from typing import Mapping, NewType

import dataclasses

BitIndex = NewType("BitIndex", int)


class UnknownIntegerTypeError(KeyError):
    pass


@dataclasses.dataclass(frozen=True)
class IntegerType:
    """A fixed-width two's complement integer type, e.g. i8 or u64."""

    n_bits: int
    signed: bool

    @property
    def name(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.n_bits}"

    @property
    def mask(self) -> int:
        return (1 << self.n_bits) - 1

    @property
    def min_value(self) -> int:
        return -(1 << (self.n_bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.n_bits - 1)) - 1 if self.signed else self.mask

    def wrap(self, value: int, /) -> int:
        """Reduces any int to this type, keeping the low n_bits bits."""
        flowed = value & self.mask
        if self.signed and flowed >= (1 << (self.n_bits - 1)):
            return flowed - (1 << self.n_bits)
        else:
            return flowed

    def to_unsigned(self, value: int, /) -> int:
        return value & self.mask

    def contains(self, value: int, /) -> bool:
        return self.min_value <= value <= self.max_value

    def __str__(self) -> str:
        return self.name


INT8 = IntegerType(8, signed=True)
INT16 = IntegerType(16, signed=True)
INT32 = IntegerType(32, signed=True)
INT64 = IntegerType(64, signed=True)
INT128 = IntegerType(128, signed=True)

UINT8 = IntegerType(8, signed=False)
UINT16 = IntegerType(16, signed=False)
UINT32 = IntegerType(32, signed=False)
UINT64 = IntegerType(64, signed=False)
UINT128 = IntegerType(128, signed=False)

INTEGER_TYPES: Mapping[str, IntegerType] = {
    integer_type.name: integer_type
    for integer_type in (
        INT8,
        INT16,
        INT32,
        INT64,
        INT128,
        UINT8,
        UINT16,
        UINT32,
        UINT64,
        UINT128,
    )
}


def lookup(name: str, /) -> IntegerType:
    try:
        return INTEGER_TYPES[name.lower()]
    except KeyError:
        raise UnknownIntegerTypeError(
            f"unknown integer type {name!r}, expected one of "
            + ", ".join(INTEGER_TYPES)
        ) from None
