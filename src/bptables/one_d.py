import logging
import typing

import attrs
import numpy as np

from bptables._precision import get_dtype
from bptables.arithmetic import blend
from bptables.config import Config
from bptables.errors import ExtrapolationError
from bptables.kernels import EXTRAPOLATION_CODES, INTERPOLATION_CODES, lookup_1d
from bptables.search import locate, resolve_index
from bptables.types import (
    ArrayLike,
    Bracket,
    BracketKind,
    Extrapolation,
    ExtrapolationLike,
    Interpolation,
    InterpolationLike,
    Numeric,
    OneDimensionalGrid,
    Range,
    to_extrapolation,
    to_interpolation,
)
from bptables.utils import as_tuple
from bptables.validation import validate_breakpoints, validate_values


logger = logging.getLogger(__name__)

__all__ = ["OneDLookupTable"]


@attrs.frozen
class OneDLookupTable:
    """
    One-dimensional lookup table mapping breakpoints to values.

    Breakpoints must be strictly ascending, e.g. 1, 2, 3, 4 and not 4, 3, 2, 1 or 1, 2, 3, 2,
    and there must be one value per breakpoint. Both are checked when the table is built,
    so a table that exists is always valid. Tables are immutable; a changed calibration
    requires building a new table.

    The deltas of the first and last segments are computed once at initialisation,
    so extrapolation costs the same as interpolation on every lookup.

    Example:
    ```python
    # Simple 0.5V to 4.5V pressure sensor (mV -> kPa)
    table = OneDLookupTable(
        breakpoints=[0, 500, 4500, 5000],
        values=[0.0, 0.0, 500.0, 500.0],
    )
    table.lookup(2000, extrapolation="hold_extreme")  # 187.5
    ```
    """

    breakpoints: typing.Tuple[Numeric, ...] = attrs.field(converter=as_tuple)
    """The breakpoints that act as the index for the values, strictly ascending."""
    values: typing.Tuple[Numeric, ...] = attrs.field(converter=as_tuple)
    """The values that represent the result from the lookup, one per breakpoint."""
    config: Config = attrs.field(factory=Config)
    """Default lookup policies and diagnostics."""

    first_delta_breakpoint: Numeric = attrs.field(init=False)
    """Delta between the first two breakpoints."""
    first_delta_value: Numeric = attrs.field(init=False)
    """Delta between the first two values."""
    last_delta_breakpoint: Numeric = attrs.field(init=False)
    """Delta between the last two breakpoints."""
    last_delta_value: Numeric = attrs.field(init=False)
    """Delta between the last two values."""

    _breakpoints_array: OneDimensionalGrid = attrs.field(
        init=False, repr=False, eq=False
    )
    _values_array: OneDimensionalGrid = attrs.field(init=False, repr=False, eq=False)

    def __attrs_post_init__(self) -> None:
        """Validate table data and precompute edge deltas."""
        validate_breakpoints(self.breakpoints)
        validate_values(self.values, self.breakpoints)

        breakpoints = self.breakpoints
        values = self.values
        object.__setattr__(
            self, "first_delta_breakpoint", breakpoints[1] - breakpoints[0]
        )
        object.__setattr__(self, "first_delta_value", values[1] - values[0])
        object.__setattr__(
            self, "last_delta_breakpoint", breakpoints[-1] - breakpoints[-2]
        )
        object.__setattr__(self, "last_delta_value", values[-1] - values[-2])

        dtype = get_dtype()
        object.__setattr__(
            self, "_breakpoints_array", np.asarray(breakpoints, dtype=dtype)
        )
        object.__setattr__(self, "_values_array", np.asarray(values, dtype=dtype))
        logger.debug(
            f"Built 1-D lookup table with {len(breakpoints)} breakpoints "
            f"over [{breakpoints[0]!r}, {breakpoints[-1]!r}]"
        )

    def __len__(self) -> int:
        return len(self.breakpoints)

    @property
    def domain(self) -> Range:
        """Range between the first and last breakpoint."""
        return Range(min=self.breakpoints[0], max=self.breakpoints[-1])

    def in_domain(self, breakpoint: Numeric) -> bool:
        """Check if `breakpoint` can be looked up without extrapolating."""
        return breakpoint in self.domain

    def lookup(
        self,
        breakpoint: Numeric,
        extrapolation: typing.Optional[ExtrapolationLike] = None,
        interpolation: typing.Optional[InterpolationLike] = None,
    ) -> Numeric:
        """
        Returns an (interpolated) value from the lookup table that matches the entered breakpoint.

        A breakpoint that matches one of the table's breakpoints exactly returns the
        stored value, whatever the policies.

        :param breakpoint: The breakpoint for which a value must be found.
        :param extrapolation: Extrapolation method for breakpoints outside the table range.
            Defaults to `config.extrapolation`.
        :param interpolation: Interpolation method for breakpoints between two table breakpoints.
            Defaults to `config.interpolation`.
        :return: The looked up value. Integer tables queried with integers return integers.
        :raises ExtrapolationError: If `breakpoint` is outside the table range and
            the extrapolation method is `Extrapolation.ERROR`.
        """
        bracket = locate(self.breakpoints, breakpoint)
        if bracket.is_exact:
            return self.values[bracket.index]
        if bracket.is_within:
            return self._interpolate(
                bracket, breakpoint, self._resolve_interpolation(interpolation)
            )
        return self._extrapolate(
            bracket, breakpoint, self._resolve_extrapolation(extrapolation)
        )

    __call__ = lookup

    def lookup_array(
        self,
        breakpoints: ArrayLike,
        extrapolation: typing.Optional[ExtrapolationLike] = None,
        interpolation: typing.Optional[InterpolationLike] = None,
    ) -> np.ndarray:
        """
        Vectorised lookup of many breakpoints at once.

        Uses a compiled kernel over the table's cached float arrays. Supports scalar
        and array inputs of any shape; the result has the same shape as the input.
        Computation is done in the precision that was active when the table was built.

        :param breakpoints: Breakpoint(s) for which values must be found.
        :param extrapolation: Extrapolation method, defaults to `config.extrapolation`.
        :param interpolation: Interpolation method, defaults to `config.interpolation`.
        :return: Array of looked up values.
        :raises ExtrapolationError: If any breakpoint is outside the table range and
            the extrapolation method is `Extrapolation.ERROR`.
        """
        extrapolation = self._resolve_extrapolation(extrapolation)
        interpolation = self._resolve_interpolation(interpolation)

        # Range checks run before casting so a 32-bit table cannot round a query into range
        requested = np.asarray(breakpoints, dtype=np.float64)
        original_shape = requested.shape
        requested = requested.ravel()

        lower = float(self.breakpoints[0])
        upper = float(self.breakpoints[-1])
        outside = (requested < lower) | (requested > upper) | np.isnan(requested)
        if np.any(outside):
            if extrapolation is Extrapolation.ERROR:
                raise ExtrapolationError(
                    requested[outside][0].item(),
                    self.breakpoints[0],
                    self.breakpoints[-1],
                )
            if self.config.warn_on_extrapolation:
                logger.warning(
                    f"Extrapolating {int(np.count_nonzero(outside))} breakpoint(s) in "
                    f"[{requested.min():.4f}, {requested.max():.4f}], "
                    f"table range [{lower:.4f}, {upper:.4f}], using {extrapolation.value!r}"
                )

        queries_flat = np.ascontiguousarray(
            requested, dtype=self._breakpoints_array.dtype
        )
        result = lookup_1d(
            self._breakpoints_array,
            self._values_array,
            queries_flat,
            EXTRAPOLATION_CODES[extrapolation],
            INTERPOLATION_CODES[interpolation],
        )
        return result.reshape(original_shape)

    def _resolve_extrapolation(
        self, extrapolation: typing.Optional[ExtrapolationLike]
    ) -> Extrapolation:
        if extrapolation is None:
            return self.config.extrapolation
        return to_extrapolation(extrapolation)

    def _resolve_interpolation(
        self, interpolation: typing.Optional[InterpolationLike]
    ) -> Interpolation:
        if interpolation is None:
            return self.config.interpolation
        return to_interpolation(interpolation)

    def _interpolate(
        self, bracket: Bracket, breakpoint: Numeric, interpolation: Interpolation
    ) -> Numeric:
        """Resolve a breakpoint strictly between `bracket.lower` and `bracket.index`."""
        if interpolation is Interpolation.LINEAR:
            index = bracket.index
            lower = typing.cast(int, bracket.lower)
            return blend(
                base=self.values[lower],
                delta=self.values[index] - self.values[lower],
                offset=breakpoint - self.breakpoints[lower],
                span=self.breakpoints[index] - self.breakpoints[lower],
            )
        index = resolve_index(self.breakpoints, bracket, breakpoint, interpolation)
        return self.values[index]

    def _extrapolate(
        self, bracket: Bracket, breakpoint: Numeric, extrapolation: Extrapolation
    ) -> Numeric:
        """Resolve a breakpoint below the first or above the last breakpoint."""
        if extrapolation is Extrapolation.ERROR:
            raise ExtrapolationError(
                breakpoint, self.breakpoints[0], self.breakpoints[-1]
            )

        if self.config.warn_on_extrapolation:
            logger.warning(
                f"Extrapolating breakpoint {breakpoint!r} outside table range "
                f"[{self.breakpoints[0]!r}, {self.breakpoints[-1]!r}] using {extrapolation.value!r}"
            )

        if extrapolation is Extrapolation.HOLD_EXTREME:
            return self.values[bracket.index]

        # Continue the line through the nearest edge segment
        if bracket.kind is BracketKind.BELOW:
            return blend(
                base=self.values[1],
                delta=-self.first_delta_value,
                offset=self.breakpoints[1] - breakpoint,
                span=self.first_delta_breakpoint,
            )
        return blend(
            base=self.values[-2],
            delta=self.last_delta_value,
            offset=breakpoint - self.breakpoints[-2],
            span=self.last_delta_breakpoint,
        )
