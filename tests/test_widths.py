import pytest

from radix128.results import Status
from radix128.services.widths import IntegerWidth, WidthService


@pytest.fixture
def service():
    return WidthService()


def _encode(service, value, **kwargs):
    buffer = bytearray(130)
    result = service.to_chars(buffer, 0, len(buffer), value, **kwargs)
    assert result.ok
    return bytes(buffer[:result.ptr])


@pytest.mark.parametrize(
    "bits, container",
    [(1, 8), (8, 8), (9, 16), (17, 32), (37, 64), (64, 64), (65, 128), (100, 128), (128, 128)],
)
def test_container_selection(bits, container):
    assert IntegerWidth(bits=bits, signed=False).container_bits == container


def test_width_limits():
    width = IntegerWidth(bits=37, signed=True)
    assert width.min_value == -(1 << 36)
    assert width.max_value == (1 << 36) - 1
    assert IntegerWidth(bits=1, signed=False).max_value == 1


def test_wrap_is_twos_complement():
    assert IntegerWidth(bits=8, signed=True).wrap(255) == -1
    assert IntegerWidth(bits=8, signed=False).wrap(-1) == 255
    assert IntegerWidth(bits=100, signed=False).wrap(1 << 100) == 0


def test_widths_are_cached(service):
    assert service._width_for(37, True) is service._width_for(37, True)
    assert service._width_for(37, True) is not service._width_for(37, False)


@pytest.mark.parametrize("bits, signed", [(0, False), (1, True), (129, False), (256, True)])
def test_unsupported_widths_are_rejected(service, bits, signed):
    with pytest.raises(ValueError):
        service.from_chars("1", bits=bits, signed=signed)


def test_37_bit_round_trip(service):
    value = -(1 << 36)
    text = _encode(service, value, bits=37, signed=True, base=16)
    assert text == b"-1000000000"
    result = service.from_chars(text, bits=37, signed=True, base=16)
    assert result.ok
    assert result.value == value


def test_37_bit_decode_rechecks_range(service):
    result = service.from_chars("1000000000", bits=37, signed=True, base=16)
    assert result.status is Status.RESULT_OUT_OF_RANGE
    assert result.ptr == 10


def test_100_bit_values_use_the_wide_codec(service):
    value = (1 << 100) - 1
    text = _encode(service, value, bits=100, signed=False, base=10)
    assert text == b"1267650600228229401496703205375"
    assert service.from_chars(text, bits=100, signed=False).value == value

    result = service.from_chars("1267650600228229401496703205376", bits=100, signed=False)
    assert result.status is Status.RESULT_OUT_OF_RANGE
    assert result.ptr == 31


def test_100_bit_signed_minimum(service):
    value = -(1 << 99)
    text = _encode(service, value, bits=100, signed=True, base=2)
    assert text == b"-1" + b"0" * 99
    assert service.from_chars(text, bits=100, signed=True, base=2).value == value
    assert service.from_chars(b"-1" + b"0" * 98 + b"1", bits=100, signed=True, base=2).status is (
        Status.RESULT_OUT_OF_RANGE
    )


def test_single_bit_unsigned(service):
    assert service.from_chars("1", bits=1, signed=False).value == 1
    assert service.from_chars("2", bits=1, signed=False).status is Status.RESULT_OUT_OF_RANGE


def test_two_bit_signed(service):
    assert service.from_chars("-2", bits=2, signed=True).value == -2
    assert service.from_chars("-3", bits=2, signed=True).status is Status.RESULT_OUT_OF_RANGE
    assert service.from_chars("1", bits=2, signed=True).value == 1
    assert service.from_chars("2", bits=2, signed=True).status is Status.RESULT_OUT_OF_RANGE


def test_container_overflow_is_reported_before_narrowing(service):
    result = service.from_chars("256", bits=5, signed=False)
    assert result.status is Status.RESULT_OUT_OF_RANGE
    assert result.ptr == 3


def test_invalid_text_is_passed_through(service):
    result = service.from_chars("z", bits=16, signed=False)
    assert result.status is Status.INVALID_ARGUMENT
    assert result.ptr == 0


def test_encode_rejects_values_outside_the_width(service):
    with pytest.raises(ValueError):
        service.to_chars(bytearray(8), 0, 8, 1 << 37, bits=37, signed=False)
    with pytest.raises(ValueError):
        service.to_chars(bytearray(8), 0, 8, -1, bits=37, signed=False)
