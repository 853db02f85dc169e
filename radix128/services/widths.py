"""Conversions for integers of an arbitrary declared bit width up to 128."""
from dataclasses import dataclass
import logging
from typing import Dict, Optional, Tuple

from ..codec import i128_from_chars, i128_to_chars, u128_from_chars, u128_to_chars
from ..constants import CONTAINER_BITS, DEFAULT_BASE, NATIVE_CONTAINER_BITS, U128_BITS
from ..results import DecodeResult, EncodeResult, Status
from ..utils import Text, native_from_chars, native_to_chars, width_limits

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegerWidth:
    bits: int
    signed: bool

    @property
    def container_bits(self) -> int:
        return next(width for width in CONTAINER_BITS if width >= self.bits)

    @property
    def is_native(self) -> bool:
        return self.container_bits in NATIVE_CONTAINER_BITS

    @property
    def min_value(self) -> int:
        return width_limits(self.bits, self.signed)[0]

    @property
    def max_value(self) -> int:
        return width_limits(self.bits, self.signed)[1]

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def wrap(self, value: int) -> int:
        """Truncate ``value`` to ``bits`` bits, two's complement when signed."""
        value &= (1 << self.bits) - 1
        if self.signed and value >> (self.bits - 1):
            value -= 1 << self.bits
        return value


class WidthService:
    """Routes conversions of ``bits``-wide integers to the narrowest container."""

    def __init__(self) -> None:
        self._width_cache: Dict[Tuple[int, bool], IntegerWidth] = {}

    def _width_for(self, bits: int, signed: bool) -> IntegerWidth:
        key = (bits, signed)
        if key in self._width_cache:
            return self._width_cache[key]

        if not isinstance(bits, int) or bits > U128_BITS:
            raise ValueError("Widths beyond 128 bits are not supported.")
        if bits < (2 if signed else 1):
            raise ValueError("Signed widths start at 2 bits, unsigned widths at 1 bit.")

        width = IntegerWidth(bits=bits, signed=signed)
        logger.debug(
            "Resolved %d-bit %s integers to the %d-bit container.",
            bits,
            "signed" if signed else "unsigned",
            width.container_bits,
        )
        self._width_cache[key] = width
        return width

    def to_chars(
        self,
        buffer: bytearray,
        first: int,
        last: int,
        value: int,
        *,
        bits: int,
        signed: bool,
        base: int = DEFAULT_BASE,
    ) -> EncodeResult:
        width = self._width_for(bits, signed)
        if not isinstance(value, int) or not width.contains(value):
            raise ValueError(f"The value does not fit in a {bits}-bit integer.")

        if width.is_native:
            return native_to_chars(buffer, first, last, value, base, bits=width.container_bits, signed=signed)
        if signed:
            return i128_to_chars(buffer, first, last, value, base)
        return u128_to_chars(buffer, first, last, value, base)

    def from_chars(
        self,
        text: Text,
        first: int = 0,
        last: Optional[int] = None,
        *,
        bits: int,
        signed: bool,
        base: int = DEFAULT_BASE,
    ) -> DecodeResult:
        width = self._width_for(bits, signed)

        if width.is_native:
            result = native_from_chars(text, first, last, base, bits=width.container_bits, signed=signed)
        elif signed:
            result = i128_from_chars(text, first, last, base)
        else:
            result = u128_from_chars(text, first, last, base)

        # Parsed fine in the container but does not survive narrowing to `bits`.
        if result.ok and width.wrap(result.value) != result.value:
            return DecodeResult(result.ptr, None, Status.RESULT_OUT_OF_RANGE)
        return result
