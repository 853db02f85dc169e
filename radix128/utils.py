"""Width-limited conversion helpers used across the codec.

``native_to_chars`` and ``native_from_chars`` behave like a standard
``to_chars``/``from_chars`` pair for integers of at most 64 bits. The 128-bit
codec only hands them chunks that fit in an unsigned 64-bit word.
"""
from typing import Optional, Tuple, Union

from .constants import DIGITS, MINUS_SIGN, NATIVE_CONTAINER_BITS
from .metrics import require_base
from .results import DecodeResult, EncodeResult, Status

Text = Union[bytes, bytearray, memoryview, str]


def _build_digit_values() -> Tuple[int, ...]:
    values = [-1] * 256
    for value, char in enumerate(DIGITS):
        values[ord(char)] = value
        values[ord(char.upper())] = value
    return tuple(values)


_DIGIT_VALUES = _build_digit_values()


def digit_value(char: int) -> int:
    """Value of a single ASCII code point as a digit, or -1 if it is not one."""
    if 0 <= char < len(_DIGIT_VALUES):
        return _DIGIT_VALUES[char]
    return -1


def pattern_length(data: bytes, first: int, last: int, base: int) -> int:
    """Length of the run of valid ``base`` digits starting at ``first``."""
    position = first
    while position < last:
        value = digit_value(data[position])
        if value < 0 or value >= base:
            break
        position += 1
    return position - first


def as_bytes(text: Text) -> Union[bytes, bytearray, memoryview]:
    if isinstance(text, str):
        # One byte per character; anything outside ASCII becomes a non-digit.
        return text.encode("ascii", "replace")
    if isinstance(text, (bytes, bytearray, memoryview)):
        return text
    raise ValueError("The text must be str, bytes, bytearray or memoryview.")


def resolve_bounds(size: int, first: int, last: Optional[int]) -> Tuple[int, int]:
    if last is None:
        last = size
    if not 0 <= first <= last <= size:
        raise ValueError("The range [first, last) must lie within the buffer.")
    return first, last


def width_limits(bits: int, signed: bool) -> Tuple[int, int]:
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def _require_native_width(bits: int) -> None:
    if bits not in NATIVE_CONTAINER_BITS:
        raise ValueError(f"Native conversion supports widths {NATIVE_CONTAINER_BITS}, not {bits}.")


def _render(number: int, base: int) -> bytes:
    if number == 0:
        return DIGITS[0].encode("ascii")

    digits = []
    negative = number < 0
    number = abs(number)
    while number:
        number, remainder = divmod(number, base)
        digits.append(DIGITS[remainder])
    if negative:
        digits.append("-")
    return "".join(reversed(digits)).encode("ascii")


def native_to_chars(
    buffer: bytearray,
    first: int,
    last: int,
    value: int,
    base: int,
    *,
    bits: int = 64,
    signed: bool = False,
) -> EncodeResult:
    """Write ``value`` into ``buffer[first:last]`` without padding or terminator."""
    require_base(base)
    _require_native_width(bits)
    first, last = resolve_bounds(len(buffer), first, last)
    low, high = width_limits(bits, signed)
    if not isinstance(value, int) or not low <= value <= high:
        raise ValueError(f"The value does not fit in a {bits}-bit integer.")

    encoded = _render(value, base)
    end = first + len(encoded)
    if end > last:
        return EncodeResult(last, Status.VALUE_TOO_LARGE)
    buffer[first:end] = encoded
    return EncodeResult(end)


def native_from_chars(
    text: Text,
    first: int = 0,
    last: Optional[int] = None,
    base: int = 10,
    *,
    bits: int = 64,
    signed: bool = False,
) -> DecodeResult:
    """Parse the longest run of ``base`` digits at ``first``.

    A leading ``-`` is accepted only when ``signed``. Nothing is consumed
    when no digit follows.
    """
    require_base(base)
    _require_native_width(bits)
    data = as_bytes(text)
    first, last = resolve_bounds(len(data), first, last)

    negative = signed and first < last and data[first] == MINUS_SIGN
    digits_first = first + 1 if negative else first
    end = digits_first + pattern_length(data, digits_first, last, base)
    if end == digits_first:
        return DecodeResult(first, None, Status.INVALID_ARGUMENT)

    result = 0
    for position in range(digits_first, end):
        result = result * base + digit_value(data[position])
    if negative:
        result = -result

    low, high = width_limits(bits, signed)
    if not low <= result <= high:
        return DecodeResult(end, None, Status.RESULT_OUT_OF_RANGE)
    return DecodeResult(end, result)
