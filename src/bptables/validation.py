import typing

from bptables.errors import ValidationError
from bptables.types import Numeric


__all__ = ["validate_breakpoints", "validate_values", "validate_value_matrix"]


def validate_breakpoints(
    breakpoints: typing.Sequence[Numeric], name: str = "breakpoints"
) -> None:
    """
    Check that breakpoints can index a lookup table.

    Ensures that:
    - There are at least 2 breakpoints (one segment to define a slope)
    - Breakpoints are strictly ascending (duplicates make bracketing ambiguous)

    :param breakpoints: Breakpoints to validate.
    :param name: Name used in error messages.
    :raises `ValidationError`: If any check fails.
    """
    if len(breakpoints) < 2:
        raise ValidationError(
            f"At least 2 `{name}` required for a lookup table, got {len(breakpoints)}"
        )
    for i in range(1, len(breakpoints)):
        if not breakpoints[i - 1] < breakpoints[i]:
            raise ValidationError(
                f"`{name}` must be strictly ascending, but {name}[{i - 1}]={breakpoints[i - 1]!r} "
                f"is not less than {name}[{i}]={breakpoints[i]!r}"
            )


def validate_values(
    values: typing.Sequence[Numeric],
    breakpoints: typing.Sequence[Numeric],
) -> None:
    """
    Check that a 1-D table has one value per breakpoint.

    :raises `ValidationError`: If the lengths differ.
    """
    if len(values) != len(breakpoints):
        raise ValidationError(
            f"Breakpoints and values must have same length. "
            f"Got {len(breakpoints)} vs {len(values)}"
        )


def validate_value_matrix(
    values: typing.Sequence[typing.Sequence[Numeric]],
    horizontal_breakpoints: typing.Sequence[Numeric],
    vertical_breakpoints: typing.Sequence[Numeric],
) -> None:
    """
    Check that a 2-D value matrix has one row per vertical breakpoint
    and one column per horizontal breakpoint.

    :raises `ValidationError`: If the matrix shape is not (M x N).
    """
    n_rows = len(vertical_breakpoints)
    n_columns = len(horizontal_breakpoints)
    if len(values) != n_rows:
        raise ValidationError(
            f"`values` must have one row per vertical breakpoint. "
            f"Got {len(values)} rows vs {n_rows} vertical breakpoints"
        )
    for j, row in enumerate(values):
        if len(row) != n_columns:
            raise ValidationError(
                f"`values` row {j} must have one entry per horizontal breakpoint. "
                f"Got {len(row)} vs {n_columns} horizontal breakpoints"
            )
