"""binary32 helpers.

Python floats are binary64; these helpers model values of the ``f32`` kind
as binary64 floats that binary32 represents exactly.
"""
from __future__ import annotations
import math
import struct

F32_MAX = float.fromhex("0x1.fffffep+127")
F32_MIN_POSITIVE = float.fromhex("0x1p-126")
F32_EPSILON = float.fromhex("0x1p-23")

F32_MANTISSA_BITS = 24


def round_to_f32(value: float) -> float:
    """Round a binary64 value to the nearest binary32 value (ties to even).

    NaN and infinities map to themselves.

    Raises:
        OverflowError: If a finite `value` rounds to a binary32 infinity.
    """
    return struct.unpack("<f", struct.pack("<f", value))[0]


def int_to_f32(n: int) -> float:
    """Round an integer straight to binary32, ties to even.

    Going through ``float(n)`` first would round twice for integers wider
    than 53 bits.
    """
    magnitude = abs(n)
    if magnitude < (1 << F32_MANTISSA_BITS):
        return float(n)
    shift = magnitude.bit_length() - F32_MANTISSA_BITS
    quotient, remainder = divmod(magnitude, 1 << shift)
    half = 1 << (shift - 1)
    if remainder > half or (remainder == half and quotient & 1):
        quotient += 1
    result = float(quotient << shift)
    return -result if n < 0 else result


def is_f32_exact(value: float) -> bool:
    """True if binary32 can hold `value` without rounding."""
    if math.isnan(value) or math.isinf(value):
        return True
    if abs(value) > F32_MAX:
        return False
    return round_to_f32(value) == value
