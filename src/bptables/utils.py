import typing

import numpy as np

from bptables.errors import ValidationError
from bptables.types import Numeric


__all__ = ["as_tuple", "as_matrix"]


def as_tuple(value: typing.Iterable[Numeric]) -> typing.Tuple[Numeric, ...]:
    """
    Convert a sequence or 1D numpy array into a tuple of scalars.

    Numpy arrays are converted to native Python scalars so that integer tables
    keep Python integer arithmetic.
    """
    if isinstance(value, np.ndarray):
        value = value.tolist()
    try:
        return tuple(value)
    except TypeError as exc:
        raise ValidationError(
            f"Expected a sequence of numbers, got {type(value).__name__}"
        ) from exc


def as_matrix(
    value: typing.Iterable[typing.Iterable[Numeric]],
) -> typing.Tuple[typing.Tuple[Numeric, ...], ...]:
    """Convert nested sequences or a 2D numpy array into a tuple of row tuples."""
    if isinstance(value, np.ndarray):
        value = value.tolist()
    try:
        return tuple(tuple(row) for row in value)
    except TypeError as exc:
        raise ValidationError("`values` must be a 2-dimensional matrix of rows") from exc
