"""
Command-line entry point: inspect the bit fields of a float or compare two
"""

import sys
import logging
import argparse

from floatcmp.mappings import Tolerance, DEFAULT_MAX_ULPS_DIFF
from floatcmp.ieee754 import get_comparator_class
from floatcmp.utils import ulp_distance


def parse_float(text):
    try:
        if 'x' in text.lower():
            return float.fromhex(text)
        return float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid floating point value: {text!r}')


def classify(wrapper) -> str:
    if wrapper.is_nan():
        return 'nan'
    if wrapper.is_infinite():
        return 'infinite'
    if wrapper.exponent_bits() == 0:
        return 'zero' if wrapper.significand_bits() == 0 else 'subnormal'
    return 'normal'


def describe(wrapper) -> str:
    digits = wrapper.bit_count // 4
    exponent = wrapper.exponent_bits() >> wrapper.significand_bit_count
    lines = [
        f'value:        {wrapper.float_value()}',
        f'bits:         0x{wrapper.bit_pattern():0{digits}x}',
        f'sign:         {wrapper.sign_bit() >> (wrapper.bit_count - 1)}',
        f'exponent:     0x{wrapper.exponent_bits():0{digits}x} (biased {exponent})',
        f'significand:  0x{wrapper.significand_bits():0{digits}x}',
        f'class:        {classify(wrapper)}',
    ]
    return '\n'.join(lines) + '\n'


def get_parser():
    parser = argparse.ArgumentParser(
        prog='floatcmp',
        description='Show the IEEE-754 fields of a float, or test two floats for approximate equality',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  floatcmp 0.1
  floatcmp --width 32 1.0 0x1.000008p+0
  floatcmp --max-ulps 16 -- -inf -inf

Exit status is 0 when the values are almost equal, 1 when they are not
and 2 on errors.
        """
    )
    parser.add_argument('value', type=parse_float,
                        help='Floating point value (decimal, hex, nan or inf)')
    parser.add_argument('other', type=parse_float, nargs='?',
                        help='Value to compare against')
    parser.add_argument('-w', '--width', type=int, choices=[32, 64], default=64,
                        help='Float width in bits (default: 64)')
    parser.add_argument('--max-ulps', type=int, default=None,
                        help=f'Maximum ULP distance (default: {DEFAULT_MAX_ULPS_DIFF})')
    parser.add_argument('--max-diff', type=parse_float, default=None,
                        help='Absolute tolerance (default: machine epsilon)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Verbose output')
    return parser


def main(argv=None) -> int:
    args = get_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        tolerance = None
        if args.max_ulps is not None or args.max_diff is not None:
            max_ulps = DEFAULT_MAX_ULPS_DIFF if args.max_ulps is None else args.max_ulps
            tolerance = Tolerance(args.max_diff, max_ulps)
        comparator = get_comparator_class(f'float{args.width}', tolerance)
    except ValueError as e:
        sys.stdout.write(f'Error: {e}\n')
        return 2

    lhs = comparator(args.value)
    sys.stdout.write(describe(lhs))
    if args.other is None:
        return 0

    rhs = comparator(args.other)
    sys.stdout.write('\n' + describe(rhs) + '\n')
    if args.verbose:
        sys.stdout.write(f'max_diff:     {comparator.max_diff}\n')
        sys.stdout.write(f'max_ulps:     {comparator.max_ulps_diff}\n')
    if lhs.sign_bit() == rhs.sign_bit():
        distance = ulp_distance(lhs.float_value(), rhs.float_value(), comparator.float_type)
        sys.stdout.write(f'ulp distance: {distance}\n')

    equal = lhs.almost_equal(rhs)
    sys.stdout.write(f'result:       {"almost equal" if equal else "not equal"}\n')
    return 0 if equal else 1
