import math
import warnings

import numpy as np

from floatcmp.mappings import type_with_size


def absolute_value(v):
    """
    Absolute value that keeps the type of v, numpy scalars included
    """
    return v if v >= 0 else -v


def uint_type(float_type):
    return type_with_size(np.dtype(float_type).itemsize).t_uint


def is_finite(value) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        return True


def to_float_type(value, float_type=np.float64):
    """
    Narrow value to float_type, warning when a finite value overflows
    """

    try:
        with np.errstate(over='ignore'):
            narrowed = float_type(value)
    except OverflowError:
        # ints beyond the float64 range
        narrowed = float_type(np.inf if value > 0 else -np.inf)
    if np.isinf(narrowed) and is_finite(value):
        warnings.warn(f'Finite {type(value).__name__} value overflows to {narrowed} as {np.dtype(float_type).name}')
    return narrowed


def float_to_bits(value, float_type=np.float64) -> int:
    """
    Reinterpret the bits of value as an unsigned integer of the same width
    """
    return int(np.array(value, dtype=float_type).view(uint_type(float_type)))


def bits_to_float(bits: int, float_type=np.float64):
    """
    Reinterpret an unsigned bit pattern as a float_type scalar
    """
    return np.array(bits, dtype=uint_type(float_type)).view(float_type)[()]


def ulp_distance(lhs, rhs, float_type=np.float64) -> int:
    """
    Number of representable values between lhs and rhs.
    Only meaningful when both share a sign.
    """
    return abs(float_to_bits(lhs, float_type) - float_to_bits(rhs, float_type))


def next_float(value, steps=1, float_type=np.float64, toward=np.inf):
    value = float_type(value)
    toward = float_type(toward)
    for _ in range(steps):
        value = np.nextafter(value, toward)
    return value
