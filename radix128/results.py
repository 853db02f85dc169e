"""Result and error types shared by the conversion routines."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Status(str, Enum):
    SUCCESS = "success"
    INVALID_ARGUMENT = "invalid_argument"
    RESULT_OUT_OF_RANGE = "result_out_of_range"
    VALUE_TOO_LARGE = "value_too_large"


@dataclass(frozen=True)
class EncodeResult:
    """Outcome of writing a number into a caller-owned buffer.

    ``ptr`` is the index one past the last byte written, or the point of
    failure when ``status`` is not ``SUCCESS``.
    """

    ptr: int
    status: Status = Status.SUCCESS

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of parsing a number out of a text span.

    ``ptr`` is the index up to which the input was consumed. ``value`` is
    only set on success.
    """

    ptr: int
    value: Optional[int] = None
    status: Status = Status.SUCCESS

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS


@dataclass(frozen=True)
class ConversionError(ValueError):
    status: Status
    position: int
    text: Optional[str] = None

    def __str__(self) -> str:
        if self.text is None:
            return f"{self.status.value} at position {self.position}"
        return f"{self.status.value} at position {self.position} in {self.text!r}"
