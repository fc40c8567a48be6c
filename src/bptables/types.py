import decimal
import enum
import fractions
import typing

import attrs
import numpy as np
import numpy.typing as npt
from typing_extensions import TypeAlias

from bptables.errors import ValidationError


__all__ = [
    "Numeric",
    "ArrayLike",
    "FloatOrArray",
    "OneDimensionalGrid",
    "TwoDimensionalGrid",
    "Interpolation",
    "Extrapolation",
    "InterpolationLike",
    "ExtrapolationLike",
    "to_interpolation",
    "to_extrapolation",
    "BracketKind",
    "Bracket",
    "Range",
]

Numeric: TypeAlias = typing.Union[
    int, float, fractions.Fraction, decimal.Decimal, np.integer, np.floating
]
"""Any ordered numeric type supporting `+ - * /` that can act as a breakpoint or value."""

ArrayLike: TypeAlias = typing.Union[
    npt.NDArray, typing.Sequence[Numeric], Numeric
]
"""Scalars, sequences or numpy arrays of queries accepted by array lookups."""

FloatOrArray = typing.Union[float, npt.NDArray[np.floating]]

OneDimensionalGrid = np.ndarray[typing.Tuple[int], np.dtype[np.floating]]
"""1D array of floats, e.g. the cached breakpoints of a table"""
TwoDimensionalGrid = np.ndarray[typing.Tuple[int, int], np.dtype[np.floating]]
"""2D array of floats, e.g. the cached value matrix of a 2-D table"""


class Interpolation(str, enum.Enum):
    """How to resolve a query that falls strictly between two breakpoints."""

    LINEAR = "linear"
    """Blend linearly between the two bracketing values. Slowest, most precise."""
    FLOOR = "floor"
    """Always round down to the value at the previous breakpoint."""
    CEILING = "ceiling"
    """Always round up to the value at the next breakpoint."""
    CLOSEST = "closest"
    """Take the value at the nearest breakpoint. Ties at the midpoint go to the next breakpoint."""


class Extrapolation(str, enum.Enum):
    """How to resolve a query that falls outside the breakpoint range of a 1-D table."""

    ERROR = "error"
    """Raise `ExtrapolationError`."""
    HOLD_EXTREME = "hold_extreme"
    """Hold the value at the first or last breakpoint."""
    LINEAR = "linear"
    """Extend the slope of the first or last segment."""


InterpolationLike = typing.Union[Interpolation, str]
ExtrapolationLike = typing.Union[Extrapolation, str]


def to_interpolation(value: InterpolationLike) -> Interpolation:
    """
    Coerce an `Interpolation` member or its string value into an `Interpolation`.

    :param value: Enum member or name such as "linear" or "closest".
    :return: The matching `Interpolation` member.
    :raises ValidationError: If the value is not a known interpolation method.
    """
    try:
        return Interpolation(value)
    except ValueError:
        raise ValidationError(
            f"Invalid interpolation method {value!r}. "
            f"Must be one of: {[member.value for member in Interpolation]}"
        ) from None


def to_extrapolation(value: ExtrapolationLike) -> Extrapolation:
    """
    Coerce an `Extrapolation` member or its string value into an `Extrapolation`.

    :param value: Enum member or name such as "error" or "hold_extreme".
    :return: The matching `Extrapolation` member.
    :raises ValidationError: If the value is not a known extrapolation method.
    """
    try:
        return Extrapolation(value)
    except ValueError:
        raise ValidationError(
            f"Invalid extrapolation method {value!r}. "
            f"Must be one of: {[member.value for member in Extrapolation]}"
        ) from None


class BracketKind(enum.Enum):
    """Where a query falls relative to a sequence of ascending breakpoints."""

    EXACT = "exact"
    BELOW = "below"
    ABOVE = "above"
    WITHIN = "within"


@attrs.frozen(slots=True)
class Bracket:
    """
    Result of locating a query among ascending breakpoints.

    For `WITHIN`, the query lies strictly between `lower` and `index`.
    For `EXACT`, `index` is the matching breakpoint. For `BELOW` and `ABOVE`,
    `index` is the nearest edge (0 or n - 1) and `lower` is None.
    """

    kind: BracketKind
    index: int
    lower: typing.Optional[int] = None

    @property
    def is_exact(self) -> bool:
        return self.kind is BracketKind.EXACT

    @property
    def is_within(self) -> bool:
        return self.kind is BracketKind.WITHIN

    @property
    def is_outside(self) -> bool:
        return self.kind is BracketKind.BELOW or self.kind is BracketKind.ABOVE


@attrs.frozen(slots=True)
class Range:
    """
    Inclusive span covered by a table's breakpoints.
    """

    min: typing.Any
    """Minimum value."""
    max: typing.Any
    """Maximum value."""

    def __attrs_post_init__(self) -> None:
        if self.min > self.max:
            raise ValidationError("Minimum value cannot be greater than maximum value.")

    def __iter__(self) -> typing.Iterator[typing.Any]:
        yield self.min
        yield self.max

    def __contains__(self, item: typing.Any) -> bool:
        return self.min <= item <= self.max
