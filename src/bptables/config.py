import attrs

from bptables.types import (
    Extrapolation,
    Interpolation,
    to_extrapolation,
    to_interpolation,
)

__all__ = ["Config"]


@attrs.frozen
class Config:
    """Default lookup policies and diagnostics for a lookup table."""

    interpolation: Interpolation = attrs.field(
        default=Interpolation.LINEAR, converter=to_interpolation
    )
    """Interpolation method used when a lookup does not specify one (default is 'linear')."""
    extrapolation: Extrapolation = attrs.field(
        default=Extrapolation.ERROR, converter=to_extrapolation
    )
    """
    Extrapolation method used when a 1-D lookup does not specify one (default is 'error').

    2-D tables ignore this setting. Out-of-range 2-D queries are always held at the
    nearest edge of the table.
    """
    warn_on_extrapolation: bool = False
    """
    Whether to log a warning whenever a query falls outside the breakpoint range.

    Useful for detecting sensor readings outside the calibrated range.
    No warnings by default to avoid log spam in tight loops.
    """
