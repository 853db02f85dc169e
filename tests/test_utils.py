import pytest

from radix128.results import Status
from radix128.utils import digit_value, native_from_chars, native_to_chars, pattern_length


def test_digit_value():
    assert digit_value(ord("0")) == 0
    assert digit_value(ord("9")) == 9
    assert digit_value(ord("a")) == 10
    assert digit_value(ord("Z")) == 35
    assert digit_value(ord("-")) == -1
    assert digit_value(0x2603) == -1


def test_pattern_length_stops_at_digits_outside_the_base():
    assert pattern_length(b"1012", 0, 4, 2) == 3
    assert pattern_length(b"ffg", 0, 3, 16) == 2
    assert pattern_length(b"zz", 0, 2, 36) == 2
    assert pattern_length(b"12", 1, 1, 10) == 0


@pytest.mark.parametrize(
    "value, base, bits, signed, text",
    [
        (0, 10, 8, False, b"0"),
        (255, 16, 8, False, b"ff"),
        (-128, 2, 8, True, b"-10000000"),
        ((1 << 64) - 1, 36, 64, False, b"3w5e11264sgsf"),
        (-(1 << 63), 10, 64, True, b"-9223372036854775808"),
    ],
)
def test_native_to_chars(value, base, bits, signed, text):
    buffer = bytearray(80)
    result = native_to_chars(buffer, 0, len(buffer), value, base, bits=bits, signed=signed)
    assert result.ok
    assert bytes(buffer[:result.ptr]) == text


def test_native_to_chars_reports_short_buffer():
    buffer = bytearray(2)
    result = native_to_chars(buffer, 0, 2, 1000, 10)
    assert result.status is Status.VALUE_TOO_LARGE
    assert result.ptr == 2


def test_native_to_chars_rejects_unsupported_widths_and_values():
    with pytest.raises(ValueError):
        native_to_chars(bytearray(8), 0, 8, 1, 10, bits=128)
    with pytest.raises(ValueError):
        native_to_chars(bytearray(8), 0, 8, 256, 10, bits=8)
    with pytest.raises(ValueError):
        native_to_chars(bytearray(8), 0, 8, -1, 10)


def test_native_from_chars_parses_longest_digit_run():
    result = native_from_chars("1234abc")
    assert result.ok
    assert result.value == 1234
    assert result.ptr == 4


def test_native_from_chars_signed():
    assert native_from_chars("-80", base=16, bits=8, signed=True).value == -128
    assert native_from_chars("-81", base=16, bits=8, signed=True).status is Status.RESULT_OUT_OF_RANGE
    assert native_from_chars("7f", base=16, bits=8, signed=True).value == 127
    assert native_from_chars("80", base=16, bits=8, signed=True).status is Status.RESULT_OUT_OF_RANGE


def test_native_from_chars_rejects_sign_for_unsigned():
    result = native_from_chars("-1")
    assert result.status is Status.INVALID_ARGUMENT
    assert result.ptr == 0


def test_native_from_chars_out_of_range_consumes_token():
    result = native_from_chars("18446744073709551616;")
    assert result.status is Status.RESULT_OUT_OF_RANGE
    assert result.ptr == 20
    assert result.value is None


def test_native_from_chars_non_ascii_text_is_not_a_digit():
    result = native_from_chars("12³4")
    assert result.value == 12
    assert result.ptr == 2
