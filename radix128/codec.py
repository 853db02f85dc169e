"""Conversion between 128-bit integers and text in any radix from 2 to 36.

Values that fit in 64 bits go straight to the width-limited primitive in
``utils``. Wider values are split into chunks of at most
``max_representable_digits(base)`` digits:

* for power-of-two bases each chunk covers a fixed number of bits, so the
  value is sliced with shifts and masks;
* for other bases the value is divided by ``max_power(base)``, the largest
  power of the base below ``2**64``.

Encoding and decoding report failures through the returned status and
position; only violated preconditions raise.
"""
from typing import Iterator, Optional, Tuple

from .arith import add_overflow, mul_overflow
from .constants import (
    DEFAULT_BASE,
    I64_MIN,
    I128_MAX,
    I128_MIN,
    MAX_CHARS,
    MINUS_SIGN,
    U64_MAX,
    U128_BITS,
    U128_MAX,
    ZERO_DIGIT,
)
from .metrics import bits_per_chunk, is_power_of_two, max_power, max_representable_digits, require_base
from .results import ConversionError, DecodeResult, EncodeResult, Status
from .utils import Text, as_bytes, native_from_chars, native_to_chars, pattern_length, resolve_bounds


def _require_value(value: int, low: int, high: int) -> None:
    if not isinstance(value, int) or not low <= value <= high:
        raise ValueError(f"The value must be an integer between {low} and {high}.")


def _write_padded(buffer: bytearray, first: int, last: int, piece: int, base: int, width: int) -> EncodeResult:
    """Write ``piece`` right-aligned in a field of exactly ``width`` digits."""
    result = native_to_chars(buffer, first, last, piece, base)
    if not result.ok:
        return result
    zero_pad = width - (result.ptr - first)
    if zero_pad == 0:
        return result
    end = first + width
    if end > last:
        return EncodeResult(last, Status.VALUE_TOO_LARGE)
    buffer[first + zero_pad:end] = buffer[first:result.ptr]
    buffer[first:first + zero_pad] = bytes([ZERO_DIGIT]) * zero_pad
    return EncodeResult(end)


def _to_chars_power_of_two(buffer: bytearray, first: int, last: int, value: int, base: int) -> EncodeResult:
    chunk_bits = bits_per_chunk(base)
    chunk_digits = max_representable_digits(base)
    leading_bits = U128_BITS % chunk_bits

    position = first
    first_digit = True

    # e.g. octal works 63 bits at a time, leaving 2 head bits.
    if leading_bits:
        head = value >> (U128_BITS - leading_bits)
        if head:
            first_digit = False
            result = native_to_chars(buffer, position, last, head, base)
            if not result.ok:
                return result
            position = result.ptr

    mask = (1 << chunk_bits) - 1
    for shift in range(U128_BITS - leading_bits - chunk_bits, -1, -chunk_bits):
        piece = (value >> shift) & mask
        if first_digit:
            result = native_to_chars(buffer, position, last, piece, base)
            first_digit = False
        else:
            result = _write_padded(buffer, position, last, piece, base, chunk_digits)
        if not result.ok:
            return result
        position = result.ptr
    return EncodeResult(position)


def _to_chars_generic(buffer: bytearray, first: int, last: int, value: int, base: int) -> EncodeResult:
    divisor = max_power(base)
    upper, lower = divmod(value, divisor)

    upper_result = u128_to_chars(buffer, first, last, upper, base)
    if not upper_result.ok:
        return upper_result
    # The remainder is always exactly max_digits long once padded.
    return _write_padded(buffer, upper_result.ptr, last, lower, base, max_representable_digits(base))


def u128_to_chars(
    buffer: bytearray,
    first: int,
    last: int,
    value: int,
    base: int = DEFAULT_BASE,
) -> EncodeResult:
    """Write the unsigned 128-bit ``value`` into ``buffer[first:last]``."""
    require_base(base)
    first, last = resolve_bounds(len(buffer), first, last)
    _require_value(value, 0, U128_MAX)

    if value <= U64_MAX:
        return native_to_chars(buffer, first, last, value, base)
    if first == last:
        return EncodeResult(last, Status.VALUE_TOO_LARGE)

    if is_power_of_two(base):
        return _to_chars_power_of_two(buffer, first, last, value, base)
    return _to_chars_generic(buffer, first, last, value, base)


def i128_to_chars(
    buffer: bytearray,
    first: int,
    last: int,
    value: int,
    base: int = DEFAULT_BASE,
) -> EncodeResult:
    """Write the signed 128-bit ``value`` into ``buffer[first:last]``."""
    require_base(base)
    first, last = resolve_bounds(len(buffer), first, last)
    _require_value(value, I128_MIN, I128_MAX)

    if value >= 0:
        return u128_to_chars(buffer, first, last, value, base)
    if value >= I64_MIN:
        return native_to_chars(buffer, first, last, value, base, signed=True)
    if last - first < 2:
        return EncodeResult(last, Status.VALUE_TOO_LARGE)
    buffer[first] = MINUS_SIGN
    return u128_to_chars(buffer, first + 1, last, -value, base)


def _chunks_from_right(first: int, last: int, size: int) -> Iterator[Tuple[int, int]]:
    while last > first:
        chunk_first = max(first, last - size)
        yield chunk_first, last
        last = chunk_first


def _from_chars_power_of_two(data: bytes, first: int, last: int, base: int) -> DecodeResult:
    chunk_bits = bits_per_chunk(base)
    result = 0
    shift = 0
    for chunk_first, chunk_last in _chunks_from_right(first, last, max_representable_digits(base)):
        partial = native_from_chars(data, chunk_first, chunk_last, base)
        if not partial.ok:
            return partial
        digits = partial.value
        if digits and shift + digits.bit_length() > U128_BITS:
            return DecodeResult(last, None, Status.RESULT_OUT_OF_RANGE)
        result |= digits << shift
        shift += chunk_bits
    return DecodeResult(last, result)


def _from_chars_generic(data: bytes, first: int, last: int, base: int) -> DecodeResult:
    chunk_factor = max_power(base)
    result = 0
    factor = 1
    for chunk_first, chunk_last in _chunks_from_right(first, last, max_representable_digits(base)):
        partial = native_from_chars(data, chunk_first, chunk_last, base)
        if not partial.ok:
            return partial
        summand, overflow = mul_overflow(factor, partial.value)
        if overflow:
            return DecodeResult(last, None, Status.RESULT_OUT_OF_RANGE)
        result, overflow = add_overflow(result, summand)
        if overflow:
            return DecodeResult(last, None, Status.RESULT_OUT_OF_RANGE)
        # Exact, not wrapped; only zero chunks may follow once it passes 128 bits.
        factor *= chunk_factor
    return DecodeResult(last, result)


def u128_from_chars(
    text: Text,
    first: int = 0,
    last: Optional[int] = None,
    base: int = DEFAULT_BASE,
) -> DecodeResult:
    """Parse an unsigned 128-bit value from the digits at ``text[first]``.

    The consumed position is the end of the digit run even when the value
    overflows, so a caller can resume after an out-of-range token.
    """
    require_base(base)
    data = as_bytes(text)
    first, last = resolve_bounds(len(data), first, last)
    if first == last:
        return DecodeResult(last, None, Status.INVALID_ARGUMENT)

    pattern_last = first + pattern_length(data, first, last, base)
    if pattern_last == first:
        return DecodeResult(first, None, Status.INVALID_ARGUMENT)

    if is_power_of_two(base):
        return _from_chars_power_of_two(data, first, pattern_last, base)
    return _from_chars_generic(data, first, pattern_last, base)


def i128_from_chars(
    text: Text,
    first: int = 0,
    last: Optional[int] = None,
    base: int = DEFAULT_BASE,
) -> DecodeResult:
    """Parse a signed 128-bit value, accepting a leading ``-``."""
    require_base(base)
    data = as_bytes(text)
    first, last = resolve_bounds(len(data), first, last)
    if first == last:
        return DecodeResult(last, None, Status.INVALID_ARGUMENT)

    if data[first] != MINUS_SIGN:
        result = u128_from_chars(data, first, last, base)
        if result.ok and result.value > I128_MAX:
            return DecodeResult(result.ptr, None, Status.RESULT_OUT_OF_RANGE)
        return result

    # One digit short of a full chunk always fits in a signed 64-bit word.
    digit_count = pattern_length(data, first + 1, last, base)
    if digit_count < max_representable_digits(base):
        return native_from_chars(data, first, last, base, signed=True)

    result = u128_from_chars(data, first + 1, last, base)
    if not result.ok:
        return result
    if result.value > -I128_MIN:
        return DecodeResult(result.ptr, None, Status.RESULT_OUT_OF_RANGE)
    return DecodeResult(result.ptr, -result.value)


def _format(value: int, base: int, signed: bool) -> str:
    buffer = bytearray(MAX_CHARS)
    encode = i128_to_chars if signed else u128_to_chars
    result = encode(buffer, 0, len(buffer), value, base)
    if not result.ok:
        raise ConversionError(result.status, result.ptr)
    return buffer[:result.ptr].decode("ascii")


def _parse(text: Text, base: int, signed: bool) -> int:
    decode = i128_from_chars if signed else u128_from_chars
    result = decode(text, 0, None, base)
    shown = text if isinstance(text, str) else None
    if not result.ok:
        raise ConversionError(result.status, result.ptr, shown)
    if result.ptr != len(text):
        raise ConversionError(Status.INVALID_ARGUMENT, result.ptr, shown)
    return result.value


def format_u128(value: int, base: int = DEFAULT_BASE) -> str:
    """Convert an unsigned 128-bit integer to text."""
    return _format(value, base, signed=False)


def format_i128(value: int, base: int = DEFAULT_BASE) -> str:
    """Convert a signed 128-bit integer to text."""
    return _format(value, base, signed=True)


def parse_u128(text: Text, base: int = DEFAULT_BASE) -> int:
    """Convert text back to an unsigned 128-bit integer; the whole text must be digits."""
    return _parse(text, base, signed=False)


def parse_i128(text: Text, base: int = DEFAULT_BASE) -> int:
    """Convert text back to a signed 128-bit integer; the whole text must be consumed."""
    return _parse(text, base, signed=True)
