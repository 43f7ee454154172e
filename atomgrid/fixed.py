"""Signed 8.8 fixed-point arithmetic on 16-bit values."""

from __future__ import annotations

FIXED_INT_BITS = 8
FIXED_FRAC_BITS = 16 - FIXED_INT_BITS
FIXED_INT_MASK = ((1 << FIXED_INT_BITS) - 1) << FIXED_FRAC_BITS
FIXED_FRAC_MASK = (1 << FIXED_FRAC_BITS) - 1

_HALF = FIXED_FRAC_BITS // 2


def _wrap16(value: int) -> int:
    """Wrap an integer into the signed 16-bit range."""
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def to_fixed(value: float) -> int:
    """Convert a number to fixed point, truncating toward zero."""
    return _wrap16(int(value * (1 << FIXED_FRAC_BITS)))


def fixed_div(a: int, b: int) -> int:
    """Divide two fixed-point values at reduced precision."""
    numerator = _wrap16(a << _HALF)
    denominator = b >> _HALF
    if denominator == 0:
        raise ZeroDivisionError("fixed-point division by a value below the precision")
    return _wrap16(_trunc_div(numerator, denominator))


def fixed_mul(a: int, b: int) -> int:
    """Multiply two fixed-point values at reduced precision."""
    return _wrap16((a >> _HALF) * (b >> _HALF))


def fixed_to_int(value: int) -> int:
    """The integer part, rounding toward negative infinity."""
    return value >> FIXED_FRAC_BITS


def fixed_from_int(value: int) -> int:
    """Convert an integer to fixed point."""
    return _wrap16(value << FIXED_FRAC_BITS)


def fixed_frac(value: int) -> int:
    """The fractional bits of a fixed-point value."""
    return value & FIXED_FRAC_MASK