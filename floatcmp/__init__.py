from floatcmp.mappings import Tolerance, TypeWithSize, type_with_size, float_type_with_size, \
    DEFAULT_MAX_ULPS_DIFF
from floatcmp.ieee754 import IEEE754, FloatCmp, DoubleCmp, float_cmp, double_cmp, \
    get_comparator_class, almost_equal

__version__ = '0.1.0'
