
import pytest
import numpy as np
from floatcmp.mappings import TYPE_WITH_SIZE, Tolerance, type_with_size, float_type_with_size


@pytest.mark.parametrize('size', [1, 2, 4, 8])
def test_integer_types(size):

    types = type_with_size(size)

    assert types.size == size
    assert types.bit_count == 8 * size
    assert np.dtype(types.t_int).itemsize == size
    assert np.dtype(types.t_uint).itemsize == size
    assert np.issubdtype(types.t_int, np.signedinteger)
    assert np.issubdtype(types.t_uint, np.unsignedinteger)


@pytest.mark.parametrize('size, float_type', [(4, np.float32), (8, np.float64)])
def test_float_types(size, float_type):

    assert float_type_with_size(size) is float_type
    assert np.dtype(float_type).itemsize == np.dtype(type_with_size(size).t_uint).itemsize


def test_every_float_type_matches_its_uint_width():

    for types in TYPE_WITH_SIZE.values():
        if types.t_float is not None:
            assert np.dtype(types.t_float).itemsize == np.dtype(types.t_uint).itemsize


@pytest.mark.parametrize('size', [0, 3, 16, -4])
def test_unsupported_size(size):

    with pytest.raises(ValueError, match=f'Unsupported type size: {size} bytes.'):
        type_with_size(size)


@pytest.mark.parametrize('size', [1, 2])
def test_no_float_type(size):

    with pytest.raises(ValueError, match=f'No floating point type with size {size} bytes.'):
        float_type_with_size(size)


def test_tolerance_defaults():

    tolerance = Tolerance()

    assert tolerance.max_diff is None
    assert tolerance.max_ulps_diff == 4


@pytest.mark.parametrize('max_diff, max_ulps_diff, message', [
    (-1e-6, 4, 'Absolute tolerance must be non-negative'),
    (float('nan'), 4, 'Absolute tolerance must be non-negative'),
    (None, -1, 'ULP tolerance must be non-negative'),
    (None, 2.5, 'ULP tolerance must be an integer'),
    (None, True, 'ULP tolerance must be an integer'),
])
def test_invalid_tolerance(max_diff, max_ulps_diff, message):

    with pytest.raises(ValueError, match=message):
        Tolerance(max_diff, max_ulps_diff)
