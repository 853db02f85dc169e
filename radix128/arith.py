"""Overflow-checked 128-bit arithmetic on Python integers."""
from typing import Tuple

from .constants import U64_BITS, U128_BITS, U128_MAX


def add_overflow(x: int, y: int) -> Tuple[int, bool]:
    """Return ``x + y`` wrapped to 128 bits and whether it wrapped."""
    total = x + y
    return total & U128_MAX, total > U128_MAX


def mul_overflow(x: int, y: int) -> Tuple[int, bool]:
    """Return ``x * y`` wrapped to 128 bits and whether it wrapped."""
    product = x * y
    return product & U128_MAX, product > U128_MAX


def countr_zero(x: int, width: int = U64_BITS) -> int:
    """Count trailing zero bits of ``x`` viewed as a ``width``-bit word."""
    if not 0 < width <= U128_BITS:
        raise ValueError("The width must be between 1 and 128 bits.")
    x &= (1 << width) - 1
    if x == 0:
        return width
    return (x & -x).bit_length() - 1
