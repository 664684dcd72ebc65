from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np


DEFAULT_MAX_ULPS_DIFF = 4


@dataclass(frozen=True)
class TypeWithSize:
    """Integer and floating point types sharing one byte width"""
    size: int
    t_int: type
    t_uint: type
    t_float: Optional[type] = None

    @property
    def bit_count(self) -> int:
        return 8 * self.size


@dataclass(frozen=True)
class Tolerance:
    """
    Thresholds used by the comparator. A max_diff of None stands for the
    machine epsilon of the compared float type.
    """
    max_diff: Optional[float] = None
    max_ulps_diff: int = DEFAULT_MAX_ULPS_DIFF

    def __post_init__(self):
        # also rejects nan
        if self.max_diff is not None and not self.max_diff >= 0:
            raise ValueError(f'Absolute tolerance must be non-negative, got {self.max_diff}.')
        if isinstance(self.max_ulps_diff, (bool, np.bool_)) or \
                not isinstance(self.max_ulps_diff, (int, np.integer)):
            raise ValueError(f'ULP tolerance must be an integer, got {self.max_ulps_diff!r}.')
        if self.max_ulps_diff < 0:
            raise ValueError(f'ULP tolerance must be non-negative, got {self.max_ulps_diff}.')


TYPE_WITH_SIZE: Dict[int, TypeWithSize] = {
    1: TypeWithSize(1, np.int8, np.uint8),
    2: TypeWithSize(2, np.int16, np.uint16),
    4: TypeWithSize(4, np.int32, np.uint32, np.float32),
    8: TypeWithSize(8, np.int64, np.uint64, np.float64),
}


def type_with_size(size: int) -> TypeWithSize:
    types = TYPE_WITH_SIZE.get(size, None)
    if types is None:
        raise ValueError(f'Unsupported type size: {size} bytes.')
    return types


def float_type_with_size(size: int) -> type:
    t_float = type_with_size(size).t_float
    if t_float is None:
        raise ValueError(f'No floating point type with size {size} bytes.')
    return t_float
