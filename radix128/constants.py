"""Shared constants for the 128-bit radix codec."""

import string

# Radix bounds accepted by every conversion routine.
MIN_BASE = 2
MAX_BASE = 36
DEFAULT_BASE = 10

# Digits emitted when encoding. Decoding also accepts the upper-case letters.
DIGITS = string.digits + string.ascii_lowercase

MINUS_SIGN = ord("-")
ZERO_DIGIT = ord("0")

# Word widths.
U64_BITS = 64
U128_BITS = 128

U64_MAX = (1 << U64_BITS) - 1
U128_MAX = (1 << U128_BITS) - 1

I64_MIN = -(1 << (U64_BITS - 1))
I128_MIN = -(1 << (U128_BITS - 1))
I128_MAX = (1 << (U128_BITS - 1)) - 1

# Containers handled natively, narrowest first. Anything wider than the last
# one goes through the 128-bit codec.
NATIVE_CONTAINER_BITS = (8, 16, 32, 64)
CONTAINER_BITS = NATIVE_CONTAINER_BITS + (U128_BITS,)

# Longest possible text: base 2, every bit set, plus a sign.
MAX_CHARS = U128_BITS + 1
