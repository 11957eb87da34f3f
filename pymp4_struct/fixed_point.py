# pymp4_struct/fixed_point.py

"""
Unsigned big-endian fixed-point numbers used in box payloads.

``Fixed16`` is 8.8 (volume), ``Fixed32`` is 16.16 (rate, matrix entries).
Values keep the raw bit pattern, so re-encoding is always exact.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class _Fixed:
    raw: int

    FRACTION_BITS: ClassVar[int] = 0
    TOTAL_BITS: ClassVar[int] = 0
    FORMAT: ClassVar[str] = ''

    def __post_init__(self):
        if not 0 <= self.raw < (1 << self.TOTAL_BITS):
            raise ValueError(f"{self.raw} does not fit in {self.TOTAL_BITS} bits")

    @classmethod
    def from_bytes(cls, data: bytes):
        return cls(struct.unpack(cls.FORMAT, data)[0])

    @classmethod
    def from_parts(cls, integer: int, fraction: int = 0):
        """Builds a value from its integer part and fractional numerator."""
        integer_bits = cls.TOTAL_BITS - cls.FRACTION_BITS
        if not 0 <= integer < (1 << integer_bits):
            raise ValueError(f"integer part {integer} does not fit in {integer_bits} bits")
        if not 0 <= fraction < (1 << cls.FRACTION_BITS):
            raise ValueError(f"fraction {fraction} does not fit in {cls.FRACTION_BITS} bits")
        return cls((integer << cls.FRACTION_BITS) | fraction)

    @property
    def integer(self) -> int:
        return self.raw >> self.FRACTION_BITS

    @property
    def fraction(self) -> int:
        """Numerator over ``2 ** FRACTION_BITS``."""
        return self.raw & ((1 << self.FRACTION_BITS) - 1)

    def to_bytes(self) -> bytes:
        return struct.pack(self.FORMAT, self.raw)

    def __float__(self) -> float:
        return self.raw / (1 << self.FRACTION_BITS)

    def __str__(self) -> str:
        return str(self.integer)


@dataclass(frozen=True)
class Fixed16(_Fixed):
    """8.8 fixed point."""
    FRACTION_BITS: ClassVar[int] = 8
    TOTAL_BITS: ClassVar[int] = 16
    FORMAT: ClassVar[str] = '>H'


@dataclass(frozen=True)
class Fixed32(_Fixed):
    """16.16 fixed point."""
    FRACTION_BITS: ClassVar[int] = 16
    TOTAL_BITS: ClassVar[int] = 32
    FORMAT: ClassVar[str] = '>I'


def decode_fixed16(data: bytes) -> Fixed16:
    return Fixed16.from_bytes(data)


def decode_fixed32(data: bytes) -> Fixed32:
    return Fixed32.from_bytes(data)


def encode_fixed16(value: Fixed16) -> bytes:
    return value.to_bytes()


def encode_fixed32(value: Fixed32) -> bytes:
    return value.to_bytes()
