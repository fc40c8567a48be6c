"""
Compiled kernels for vectorised lookups over floating point arrays.

These mirror the scalar lookup paths of `OneDLookupTable` and `TwoDLookupTable`
but operate on flat float arrays, with policies passed as integer codes.
Out-of-range checks for `Extrapolation.ERROR` happen before a kernel is called,
so the kernels treat that policy like holding the extreme value.
"""

import typing

import numba
import numpy as np

from bptables.types import Extrapolation, Interpolation


__all__ = [
    "INTERPOLATION_CODES",
    "EXTRAPOLATION_CODES",
    "lookup_1d",
    "lookup_2d",
]

_INTERPOLATE_LINEAR = 0
_INTERPOLATE_FLOOR = 1
_INTERPOLATE_CEILING = 2
_INTERPOLATE_CLOSEST = 3

_EXTRAPOLATE_ERROR = 0
_EXTRAPOLATE_HOLD = 1
_EXTRAPOLATE_LINEAR = 2

INTERPOLATION_CODES: typing.Dict[Interpolation, int] = {
    Interpolation.LINEAR: _INTERPOLATE_LINEAR,
    Interpolation.FLOOR: _INTERPOLATE_FLOOR,
    Interpolation.CEILING: _INTERPOLATE_CEILING,
    Interpolation.CLOSEST: _INTERPOLATE_CLOSEST,
}
"""Integer codes passed to the kernels for each interpolation method."""

EXTRAPOLATION_CODES: typing.Dict[Extrapolation, int] = {
    Extrapolation.ERROR: _EXTRAPOLATE_ERROR,
    Extrapolation.HOLD_EXTREME: _EXTRAPOLATE_HOLD,
    Extrapolation.LINEAR: _EXTRAPOLATE_LINEAR,
}
"""Integer codes passed to the kernels for each extrapolation method."""


@numba.njit(cache=True)
def _closest_index(breakpoints: np.ndarray, index: int, query: float) -> int:
    span = breakpoints[index] - breakpoints[index - 1]
    remaining = breakpoints[index] - query
    if remaining * 2 > span:
        return index - 1
    return index


@numba.njit(cache=True)
def _lookup_1d_scalar(
    breakpoints: np.ndarray,
    values: np.ndarray,
    query: float,
    extrapolation: int,
    interpolation: int,
) -> float:
    n = breakpoints.shape[0]
    index = np.searchsorted(breakpoints, query)

    # High end out of bounds, NaN included
    if index == n or query != query:
        if extrapolation == _EXTRAPOLATE_LINEAR:
            return (query - breakpoints[n - 2]) * (values[n - 1] - values[n - 2]) / (
                breakpoints[n - 1] - breakpoints[n - 2]
            ) + values[n - 2]
        return values[n - 1]

    if breakpoints[index] == query:
        return values[index]

    # Low end out of bounds
    if index == 0:
        if extrapolation == _EXTRAPOLATE_LINEAR:
            return (breakpoints[1] - query) * -(values[1] - values[0]) / (
                breakpoints[1] - breakpoints[0]
            ) + values[1]
        return values[0]

    lower = index - 1
    if interpolation == _INTERPOLATE_LINEAR:
        return (query - breakpoints[lower]) * (values[index] - values[lower]) / (
            breakpoints[index] - breakpoints[lower]
        ) + values[lower]
    if interpolation == _INTERPOLATE_FLOOR:
        return values[lower]
    if interpolation == _INTERPOLATE_CEILING:
        return values[index]
    return values[_closest_index(breakpoints, index, query)]


@numba.njit(cache=True)
def lookup_1d(
    breakpoints: np.ndarray,
    values: np.ndarray,
    queries: np.ndarray,
    extrapolation: int,
    interpolation: int,
) -> np.ndarray:
    """
    Evaluate a 1-D lookup table at every query.

    :param breakpoints: Strictly ascending 1D float array.
    :param values: 1D float array aligned with `breakpoints`.
    :param queries: Flat float array of queries.
    :param extrapolation: Code from `EXTRAPOLATION_CODES`.
    :param interpolation: Code from `INTERPOLATION_CODES`.
    :return: Flat array of results, same length as `queries`.
    """
    result = np.empty(queries.shape[0], dtype=values.dtype)
    for i in range(queries.shape[0]):
        result[i] = _lookup_1d_scalar(
            breakpoints, values, queries[i], extrapolation, interpolation
        )
    return result


@numba.njit(cache=True)
def _resolve_axis(
    breakpoints: np.ndarray, query: float, interpolation: int
) -> typing.Tuple[int, int]:
    """Return (index, lower) for one axis, where lower is -1 when no blend is needed."""
    n = breakpoints.shape[0]
    index = np.searchsorted(breakpoints, query)
    if index == n or query != query:
        return n - 1, -1
    if breakpoints[index] == query or index == 0:
        return index, -1
    if interpolation == _INTERPOLATE_LINEAR:
        return index, index - 1
    if interpolation == _INTERPOLATE_FLOOR:
        return index - 1, -1
    if interpolation == _INTERPOLATE_CEILING:
        return index, -1
    return _closest_index(breakpoints, index, query), -1


@numba.njit(cache=True)
def _lookup_2d_scalar(
    horizontal_breakpoints: np.ndarray,
    vertical_breakpoints: np.ndarray,
    values: np.ndarray,
    horizontal: float,
    vertical: float,
    interpolation: int,
) -> float:
    col, col_lower = _resolve_axis(horizontal_breakpoints, horizontal, interpolation)
    row, row_lower = _resolve_axis(vertical_breakpoints, vertical, interpolation)

    if col_lower < 0 and row_lower < 0:
        return values[row, col]

    if col_lower >= 0:
        offset_h = horizontal - horizontal_breakpoints[col_lower]
        span_h = horizontal_breakpoints[col] - horizontal_breakpoints[col_lower]
        if row_lower < 0:
            return (
                offset_h * (values[row, col] - values[row, col_lower]) / span_h
                + values[row, col_lower]
            )
        low = (
            offset_h * (values[row_lower, col] - values[row_lower, col_lower]) / span_h
            + values[row_lower, col_lower]
        )
        high = (
            offset_h * (values[row, col] - values[row, col_lower]) / span_h
            + values[row, col_lower]
        )
    else:
        low = values[row_lower, col]
        high = values[row, col]

    return (vertical - vertical_breakpoints[row_lower]) * (high - low) / (
        vertical_breakpoints[row] - vertical_breakpoints[row_lower]
    ) + low


@numba.njit(cache=True)
def lookup_2d(
    horizontal_breakpoints: np.ndarray,
    vertical_breakpoints: np.ndarray,
    values: np.ndarray,
    horizontal: np.ndarray,
    vertical: np.ndarray,
    interpolation: int,
) -> np.ndarray:
    """
    Evaluate a 2-D lookup table at every (horizontal, vertical) query pair.

    Out-of-range queries are held at the nearest edge on each axis.

    :param horizontal_breakpoints: Strictly ascending 1D float array (N).
    :param vertical_breakpoints: Strictly ascending 1D float array (M).
    :param values: 2D float array of shape (M, N).
    :param horizontal: Flat float array of horizontal queries.
    :param vertical: Flat float array of vertical queries, same length as `horizontal`.
    :param interpolation: Code from `INTERPOLATION_CODES`.
    :return: Flat array of results.
    """
    result = np.empty(horizontal.shape[0], dtype=values.dtype)
    for i in range(horizontal.shape[0]):
        result[i] = _lookup_2d_scalar(
            horizontal_breakpoints,
            vertical_breakpoints,
            values,
            horizontal[i],
            vertical[i],
            interpolation,
        )
    return result
