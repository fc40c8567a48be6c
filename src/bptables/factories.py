import typing

import attrs

from bptables.config import Config
from bptables.one_d import OneDLookupTable
from bptables.two_d import TwoDLookupTable
from bptables.types import (
    ExtrapolationLike,
    InterpolationLike,
    Numeric,
)

__all__ = ["build_one_d_table", "build_two_d_table"]


def _build_config(
    config: typing.Optional[Config],
    interpolation: typing.Optional[InterpolationLike],
    extrapolation: typing.Optional[ExtrapolationLike],
    warn_on_extrapolation: typing.Optional[bool],
) -> Config:
    """Start from `config` (or the defaults) and override any option that was given."""
    config = config or Config()
    overrides: typing.Dict[str, typing.Any] = {}
    if interpolation is not None:
        overrides["interpolation"] = interpolation
    if extrapolation is not None:
        overrides["extrapolation"] = extrapolation
    if warn_on_extrapolation is not None:
        overrides["warn_on_extrapolation"] = warn_on_extrapolation
    if overrides:
        config = attrs.evolve(config, **overrides)
    return config


def build_one_d_table(
    breakpoints: typing.Iterable[Numeric],
    values: typing.Iterable[Numeric],
    config: typing.Optional[Config] = None,
    interpolation: typing.Optional[InterpolationLike] = None,
    extrapolation: typing.Optional[ExtrapolationLike] = None,
    warn_on_extrapolation: typing.Optional[bool] = None,
) -> OneDLookupTable:
    """
    Build a validated 1-D lookup table.

    :param breakpoints: Strictly ascending breakpoints (sequence or numpy array), at least 2.
    :param values: One value per breakpoint.
    :param config: Base configuration. Defaults to `Config()`.
    :param interpolation: Overrides `config.interpolation` if given.
    :param extrapolation: Overrides `config.extrapolation` if given.
    :param warn_on_extrapolation: Overrides `config.warn_on_extrapolation` if given.
    :return: The lookup table.
    :raises ValidationError: If the breakpoints are not strictly ascending,
        the lengths don't match, or fewer than 2 breakpoints are given.
    """
    return OneDLookupTable(
        breakpoints=breakpoints,  # type: ignore[arg-type]
        values=values,  # type: ignore[arg-type]
        config=_build_config(
            config, interpolation, extrapolation, warn_on_extrapolation
        ),
    )


def build_two_d_table(
    horizontal_breakpoints: typing.Iterable[Numeric],
    vertical_breakpoints: typing.Iterable[Numeric],
    values: typing.Iterable[typing.Iterable[Numeric]],
    config: typing.Optional[Config] = None,
    interpolation: typing.Optional[InterpolationLike] = None,
    warn_on_extrapolation: typing.Optional[bool] = None,
) -> TwoDLookupTable:
    """
    Build a validated 2-D lookup table.

    :param horizontal_breakpoints: Strictly ascending column breakpoints (N >= 2).
    :param vertical_breakpoints: Strictly ascending row breakpoints (M >= 2).
    :param values: Value matrix of shape (M x N), `values[j][i]` at
        `(horizontal_breakpoints[i], vertical_breakpoints[j])`.
    :param config: Base configuration. Defaults to `Config()`.
    :param interpolation: Overrides `config.interpolation` if given.
    :param warn_on_extrapolation: Overrides `config.warn_on_extrapolation` if given.
    :return: The lookup table.
    :raises ValidationError: If either axis is not strictly ascending or too short,
        or the matrix shape does not match the axes.
    """
    return TwoDLookupTable(
        horizontal_breakpoints=horizontal_breakpoints,  # type: ignore[arg-type]
        vertical_breakpoints=vertical_breakpoints,  # type: ignore[arg-type]
        values=values,  # type: ignore[arg-type]
        config=_build_config(config, interpolation, None, warn_on_extrapolation),
    )
