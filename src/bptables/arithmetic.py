"""
Generic arithmetic for blending breakpoint and value types.

Lookups work with any ordered numeric type (`int`, `float`, `Fraction`,
`Decimal`, numpy scalars). Blends are computed as `(offset * delta) / span + base`
so that when every operand is integral the division truncates toward zero and
an integer calibration table keeps producing integers.
"""

import numbers
import typing

import numpy as np

from bptables.types import Numeric


__all__ = ["is_integral", "divide", "blend"]


def is_integral(value: typing.Any) -> bool:
    """Check whether `value` is an integer scalar (Python or numpy, excluding bools)."""
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (numbers.Integral, np.integer))


def divide(numerator: Numeric, denominator: Numeric) -> Numeric:
    """
    Divide two numbers, truncating toward zero when both are integral.

    :param numerator: Dividend.
    :param denominator: Divisor, must be non-zero.
    :return: `numerator / denominator`, or its integer part for integral operands.
    """
    if is_integral(numerator) and is_integral(denominator):
        quotient = abs(numerator) // abs(denominator)
        if (numerator < 0) != (denominator < 0):
            return -quotient
        return quotient
    return numerator / denominator


def blend(base: Numeric, delta: Numeric, offset: Numeric, span: Numeric) -> Numeric:
    """
    Move from `base` along a segment with rise `delta` over run `span`, by `offset`.

    Computes `base + (offset * delta) / span`, which is linear interpolation
    when `0 < offset < span` and linear extrapolation otherwise.

    :param base: Value at the start of the segment.
    :param delta: Change in value across the segment.
    :param offset: Distance of the query from the start of the segment.
    :param span: Length of the segment, must be non-zero.
    :return: The blended value.
    """
    return divide(offset * delta, span) + base
