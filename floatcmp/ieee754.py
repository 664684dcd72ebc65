"""
Copyright 2024 The floatcmp Authors
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at
    http://www.apache.org/licenses/LICENSE-2.0
Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import numbers
import logging
import warnings
from functools import lru_cache

import numpy as np

from floatcmp.mappings import Tolerance, DEFAULT_MAX_ULPS_DIFF, type_with_size
from floatcmp.utils import absolute_value, float_to_bits, to_float_type


logger = logging.getLogger(__name__)


class IEEE754:
    """
    One IEEE-754 floating point value together with its raw bit pattern.

    Concrete subclasses set float_type. The width mapping is resolved while
    the subclass is created, so an unsupported float type fails at import
    time rather than during a comparison.
    """

    __slots__ = ('_value', '_bits')

    float_type = None

    # Industry standard(?) number of ULPs to consider close enough
    max_ulps_diff = DEFAULT_MAX_ULPS_DIFF

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if 'float_type' in cls.__dict__:
            cls._resolve_float_type()
        if cls.float_type is None:
            return

        if 'max_diff' in cls.__dict__:
            cls.max_diff = cls.float_type(cls.max_diff)
        # raises on invalid tolerances
        Tolerance(cls.max_diff, cls.max_ulps_diff)
        if cls.max_ulps_diff >= 1 << cls.significand_bit_count:
            warnings.warn(f'{cls.__name__}: ULP tolerance {cls.max_ulps_diff} spans at least a full binade')

    @classmethod
    def _resolve_float_type(cls):
        # np.dtype(None) would silently mean float64
        if cls.float_type is None:
            raise ValueError('Unsupported floating point type: None.')
        try:
            float_type = np.dtype(cls.float_type).type
        except TypeError:
            raise ValueError(f'Unsupported floating point type: {cls.float_type!r}.')
        types = type_with_size(np.dtype(float_type).itemsize)
        if types.t_float is not float_type:
            raise ValueError(f'Unsupported floating point type: {np.dtype(float_type).name}.')

        cls.float_type = float_type
        cls.bit_count = types.bit_count
        cls.significand_bit_count = int(np.finfo(float_type).nmant)
        # the 1 is for the sign bit
        cls.exponent_bit_count = cls.bit_count - 1 - cls.significand_bit_count

        all_ones = (1 << cls.bit_count) - 1
        cls.sign_bit_mask = 1 << (cls.bit_count - 1)
        cls.significand_bit_mask = all_ones >> (cls.exponent_bit_count + 1)
        cls.exponent_bit_mask = all_ones & ~(cls.sign_bit_mask | cls.significand_bit_mask)

        if 'max_diff' not in cls.__dict__:
            cls.max_diff = np.finfo(float_type).eps

    def __init__(self, value):
        if self.float_type is None:
            raise TypeError(f'{type(self).__name__} has no float type, use FloatCmp or DoubleCmp.')
        if isinstance(value, IEEE754):
            self._check_width(value)
            value = value.float_value()
        value = to_float_type(value, self.float_type)
        object.__setattr__(self, '_value', value)
        object.__setattr__(self, '_bits', float_to_bits(value, self.float_type))

    def __setattr__(self, name, value):
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __delattr__(self, name):
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __reduce__(self):
        tolerance = type(self).__dict__.get('tolerance', None)
        if tolerance is not None:
            return rebuild, (self.float_type, tolerance, self._value)
        return type(self), (self._value,)

    def __repr__(self):
        return f'{type(self).__name__}({self._value})'

    def __float__(self):
        return float(self._value)

    def _check_width(self, other):
        if other.float_type is not self.float_type:
            raise TypeError(f'Cannot mix {type(self).__name__} and {type(other).__name__}: '
                            f'{self.bit_count} and {other.bit_count} bit floats.')

    # Bit fields, masked in place

    def sign_bit(self) -> int:
        return self.sign_bit_mask & self._bits

    def exponent_bits(self) -> int:
        return self.exponent_bit_mask & self._bits

    def significand_bits(self) -> int:
        return self.significand_bit_mask & self._bits

    def bit_pattern(self) -> int:
        return self._bits

    def float_value(self):
        return self._value

    def is_nan(self) -> bool:
        # all ones in the exponent and a non-zero significand
        return self.exponent_bits() == self.exponent_bit_mask and self.significand_bits() != 0

    def is_infinite(self) -> bool:
        return self.exponent_bits() == self.exponent_bit_mask and self.significand_bits() == 0

    # Comparison

    @classmethod
    def float_close(cls, lhs, rhs) -> bool:
        """
        Absolute check, needed near zero where neighbouring values have
        very different bit patterns.
        """
        with np.errstate(over='ignore', invalid='ignore'):
            diff = cls.float_type(lhs) - cls.float_type(rhs)
        return bool(absolute_value(diff) <= cls.max_diff)

    @classmethod
    def ulp_close(cls, lhs: int, rhs: int) -> bool:
        """
        Bit pattern distance check. Patterns are ordered like sign-magnitude
        integers, so both must carry the same sign.
        """
        return abs(int(lhs) - int(rhs)) <= cls.max_ulps_diff

    def almost_equal(self, other) -> bool:
        """
        Test whether two floats are equal or close enough to be considered
        equal. other may be a wrapper of the same width or a raw value.
        """
        if isinstance(other, IEEE754):
            self._check_width(other)
        else:
            other = type(self)(other)

        # NaN is not equal to anything, including other NaN
        if self.is_nan() or other.is_nan():
            return False

        if self.float_close(self._value, other._value):
            return True

        if self.sign_bit() != other.sign_bit():
            return False

        return self.ulp_close(self._bits, other._bits)

    def __eq__(self, other):
        if isinstance(other, IEEE754):
            if other.float_type is not self.float_type:
                return NotImplemented
        elif not isinstance(other, numbers.Real):
            return NotImplemented
        return self.almost_equal(other)

    # approximate equality is not transitive
    __hash__ = None


class FloatCmp(IEEE754):
    __slots__ = ()
    float_type = np.float32


class DoubleCmp(IEEE754):
    __slots__ = ()
    float_type = np.float64


float_cmp = FloatCmp
double_cmp = DoubleCmp


def get_comparator_class(float_type, tolerance: Tolerance = None) -> type:
    """
    Map a float type or its name to the comparator class, optionally with
    custom tolerances
    """

    mapping = {
        'FLOAT32': FloatCmp,
        'SINGLE': FloatCmp,
        'F4': FloatCmp,
        'FLOAT64': DoubleCmp,
        'DOUBLE': DoubleCmp,
        'F8': DoubleCmp,
    }
    if float_type is None:
        key = None
    elif isinstance(float_type, str):
        key = float_type.upper()
    else:
        try:
            key = np.dtype(float_type).name.upper()
        except TypeError:
            key = None
    comparator = mapping.get(key, None)
    if comparator is None:
        raise ValueError(f'Unsupported floating point type: {float_type}.')

    if tolerance is None:
        return comparator
    return tolerance_class(comparator, tolerance)


@lru_cache(maxsize=64)
def tolerance_class(comparator, tolerance: Tolerance) -> type:
    max_diff = comparator.max_diff if tolerance.max_diff is None else tolerance.max_diff
    logger.debug(f'Creating {comparator.__name__} with max_diff={max_diff}, '
                 f'max_ulps_diff={tolerance.max_ulps_diff}')
    namespace = {
        '__slots__': (),
        '__module__': __name__,
        'max_diff': max_diff,
        'max_ulps_diff': tolerance.max_ulps_diff,
        'tolerance': tolerance,
    }
    return type(f'{comparator.__name__}WithTolerance', (comparator,), namespace)


def rebuild(float_type, tolerance, value):
    return get_comparator_class(float_type, tolerance)(value)


def almost_equal(lhs, rhs, float_type=np.float64) -> bool:
    """
    Compare two values, either of which may be a raw float or a wrapper.
    float_type is used only when both are raw.
    """
    if isinstance(lhs, IEEE754):
        return lhs.almost_equal(rhs)
    if isinstance(rhs, IEEE754):
        return rhs.almost_equal(lhs)
    return get_comparator_class(float_type)(lhs).almost_equal(rhs)
