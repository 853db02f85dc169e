"""Per-radix constants used to split 128-bit conversions into 64-bit chunks."""
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from .arith import countr_zero
from .constants import MAX_BASE, MIN_BASE, U64_BITS, U64_MAX


@dataclass(frozen=True)
class BaseMetrics:
    max_digits: int
    max_power: int


def _max_representable_digits_naive(base: int) -> int:
    limit = 1 << U64_BITS
    power = 1
    digits = 0
    while power * base <= limit:
        power *= base
        digits += 1
    return digits


def _u64_pow_naive(x: int, y: int) -> int:
    result = 1
    for _ in range(y):
        result = (result * x) & U64_MAX
    return result


@lru_cache(maxsize=1)
def _metrics_table() -> Tuple[BaseMetrics, ...]:
    table = [BaseMetrics(max_digits=0, max_power=0)] * MIN_BASE
    for base in range(MIN_BASE, MAX_BASE + 1):
        digits = _max_representable_digits_naive(base)
        table.append(BaseMetrics(max_digits=digits, max_power=_u64_pow_naive(base, digits)))
    return tuple(table)


def require_base(base: int) -> None:
    if not isinstance(base, int) or not MIN_BASE <= base <= MAX_BASE:
        raise ValueError(f"The base must be an integer between {MIN_BASE} and {MAX_BASE}.")


def base_metrics(base: int) -> BaseMetrics:
    require_base(base)
    return _metrics_table()[base]


def max_representable_digits(base: int) -> int:
    """Number of digits in ``base`` that an unsigned 64-bit word always holds.

    This is ``floor(64 / log2(base))``, computed without floating point.
    """
    return base_metrics(base).max_digits


def max_power(base: int) -> int:
    """Greatest power of ``base`` below ``2**64``, or 0 if the next one is ``2**64``.

    Zero means no bit of the 64-bit word is wasted, as for bases 2, 4 and 16.
    """
    return base_metrics(base).max_power


def is_power_of_two(base: int) -> bool:
    require_base(base)
    return base & (base - 1) == 0


def bits_per_chunk(base: int) -> int:
    """Bits covered by one full chunk of digits in a power-of-two base."""
    if not is_power_of_two(base):
        raise ValueError("Chunks are only bit-aligned for power-of-two bases.")
    return countr_zero(max_power(base), U64_BITS)
