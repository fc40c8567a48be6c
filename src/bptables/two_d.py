import logging
import typing

import attrs
import numpy as np

from bptables._precision import get_dtype
from bptables.arithmetic import blend
from bptables.config import Config
from bptables.errors import ValidationError
from bptables.kernels import INTERPOLATION_CODES, lookup_2d
from bptables.search import locate, resolve_index
from bptables.types import (
    ArrayLike,
    Bracket,
    Interpolation,
    InterpolationLike,
    Numeric,
    OneDimensionalGrid,
    Range,
    TwoDimensionalGrid,
    to_interpolation,
)
from bptables.utils import as_matrix, as_tuple
from bptables.validation import validate_breakpoints, validate_value_matrix


logger = logging.getLogger(__name__)

__all__ = ["TwoDLookupTable"]


@attrs.frozen
class TwoDLookupTable:
    """
    Two-dimensional lookup table mapping (horizontal, vertical) breakpoint pairs to values.

    Both breakpoint axes must be strictly ascending, and `values` must have one row
    per vertical breakpoint, each with one entry per horizontal breakpoint, so that
    `values[j][i]` corresponds to `(horizontal_breakpoints[i], vertical_breakpoints[j])`.

    Unlike `OneDLookupTable` there is no extrapolation policy. Queries outside the
    range of either axis are held at the nearest edge of that axis, so lookups never fail.

    Example (a small part of an injector timing table):
    ```
        rpm/throttle  0     500   1000
        0             3.0   4.2   5.5
        3             4.2   5.0   6.0
        6             5.0   5.8   6.5
    ```
    ```python
    table = TwoDLookupTable(
        horizontal_breakpoints=[0, 500, 1000],
        vertical_breakpoints=[0, 3, 6],
        values=[[3.0, 4.2, 5.5], [4.2, 5.0, 6.0], [5.0, 5.8, 6.5]],
    )
    table.lookup(750, 4)  # 5.7166...
    ```
    """

    horizontal_breakpoints: typing.Tuple[Numeric, ...] = attrs.field(
        converter=as_tuple
    )
    """The breakpoints that act as the horizontal (column) index for the values."""
    vertical_breakpoints: typing.Tuple[Numeric, ...] = attrs.field(converter=as_tuple)
    """The breakpoints that act as the vertical (row) index for the values."""
    values: typing.Tuple[typing.Tuple[Numeric, ...], ...] = attrs.field(
        converter=as_matrix
    )
    """The values matrix, (n_vertical x n_horizontal)."""
    config: Config = attrs.field(factory=Config)
    """Default interpolation method and diagnostics. `config.extrapolation` is not used."""

    _horizontal_array: OneDimensionalGrid = attrs.field(
        init=False, repr=False, eq=False
    )
    _vertical_array: OneDimensionalGrid = attrs.field(init=False, repr=False, eq=False)
    _values_array: TwoDimensionalGrid = attrs.field(init=False, repr=False, eq=False)

    def __attrs_post_init__(self) -> None:
        """Validate the breakpoint axes and the shape of the values matrix."""
        validate_breakpoints(self.horizontal_breakpoints, "horizontal_breakpoints")
        validate_breakpoints(self.vertical_breakpoints, "vertical_breakpoints")
        validate_value_matrix(
            self.values, self.horizontal_breakpoints, self.vertical_breakpoints
        )

        dtype = get_dtype()
        object.__setattr__(
            self,
            "_horizontal_array",
            np.asarray(self.horizontal_breakpoints, dtype=dtype),
        )
        object.__setattr__(
            self, "_vertical_array", np.asarray(self.vertical_breakpoints, dtype=dtype)
        )
        object.__setattr__(self, "_values_array", np.asarray(self.values, dtype=dtype))
        logger.debug(
            f"Built 2-D lookup table of shape {self.shape} over "
            f"horizontal [{self.horizontal_breakpoints[0]!r}, {self.horizontal_breakpoints[-1]!r}], "
            f"vertical [{self.vertical_breakpoints[0]!r}, {self.vertical_breakpoints[-1]!r}]"
        )

    @property
    def shape(self) -> typing.Tuple[int, int]:
        """Shape of the values matrix, (n_vertical, n_horizontal)."""
        return len(self.vertical_breakpoints), len(self.horizontal_breakpoints)

    @property
    def horizontal_domain(self) -> Range:
        return Range(
            min=self.horizontal_breakpoints[0], max=self.horizontal_breakpoints[-1]
        )

    @property
    def vertical_domain(self) -> Range:
        return Range(min=self.vertical_breakpoints[0], max=self.vertical_breakpoints[-1])

    def lookup(
        self,
        horizontal: Numeric,
        vertical: Numeric,
        interpolation: typing.Optional[InterpolationLike] = None,
    ) -> Numeric:
        """
        Returns an (interpolated) value from the lookup table that matches the entered breakpoints.

        Each axis is resolved independently. With linear interpolation the result is a
        bilinear blend of the surrounding cells (or a 1-D blend if only one axis falls
        between breakpoints). With floor, ceiling or closest, each axis is snapped to a
        single breakpoint and the matching cell is returned without blending.

        :param horizontal: The horizontal breakpoint for which a value must be found.
        :param vertical: The vertical breakpoint for which a value must be found.
        :param interpolation: Interpolation method, defaults to `config.interpolation`.
        :return: The looked up value.
        """
        interpolation = self._resolve_interpolation(interpolation)
        horizontal_bracket = locate(self.horizontal_breakpoints, horizontal)
        vertical_bracket = locate(self.vertical_breakpoints, vertical)

        if self.config.warn_on_extrapolation and (
            horizontal_bracket.is_outside or vertical_bracket.is_outside
        ):
            logger.warning(
                f"Holding breakpoints ({horizontal!r}, {vertical!r}) at the table edge, "
                f"table range horizontal [{self.horizontal_breakpoints[0]!r}, {self.horizontal_breakpoints[-1]!r}], "
                f"vertical [{self.vertical_breakpoints[0]!r}, {self.vertical_breakpoints[-1]!r}]"
            )

        if interpolation is Interpolation.LINEAR:
            return self._interpolate(
                horizontal_bracket, vertical_bracket, horizontal, vertical
            )

        col = resolve_index(
            self.horizontal_breakpoints, horizontal_bracket, horizontal, interpolation
        )
        row = resolve_index(
            self.vertical_breakpoints, vertical_bracket, vertical, interpolation
        )
        return self.values[row][col]

    __call__ = lookup

    def lookup_array(
        self,
        horizontal: ArrayLike,
        vertical: ArrayLike,
        interpolation: typing.Optional[InterpolationLike] = None,
    ) -> np.ndarray:
        """
        Vectorised lookup of many breakpoint pairs at once.

        `horizontal` and `vertical` are broadcast against each other, so a scalar can be
        paired with an array. Computation is done in the precision that was active when
        the table was built.

        :param horizontal: Horizontal breakpoint(s).
        :param vertical: Vertical breakpoint(s).
        :param interpolation: Interpolation method, defaults to `config.interpolation`.
        :return: Array of looked up values with the broadcast shape of the inputs.
        """
        interpolation = self._resolve_interpolation(interpolation)
        dtype = self._values_array.dtype
        h = np.asarray(horizontal, dtype=dtype)
        v = np.asarray(vertical, dtype=dtype)
        try:
            h, v = np.broadcast_arrays(h, v)
        except ValueError as exc:
            raise ValidationError(
                f"Incompatible shapes: horizontal {h.shape}, vertical {v.shape}"
            ) from exc

        original_shape = h.shape
        h_flat = np.ascontiguousarray(h.ravel())
        v_flat = np.ascontiguousarray(v.ravel())

        if self.config.warn_on_extrapolation:
            h_min, h_max = self._horizontal_array[0], self._horizontal_array[-1]
            v_min, v_max = self._vertical_array[0], self._vertical_array[-1]
            outside = (
                (h_flat < h_min) | (h_flat > h_max) | (v_flat < v_min) | (v_flat > v_max)
                | np.isnan(h_flat) | np.isnan(v_flat)
            )
            if np.any(outside):
                logger.warning(
                    f"Holding {int(np.count_nonzero(outside))} breakpoint pair(s) at the table edge, "
                    f"table range horizontal [{h_min:.4f}, {h_max:.4f}], vertical [{v_min:.4f}, {v_max:.4f}]"
                )

        result = lookup_2d(
            self._horizontal_array,
            self._vertical_array,
            self._values_array,
            h_flat,
            v_flat,
            INTERPOLATION_CODES[interpolation],
        )
        return result.reshape(original_shape)

    def _resolve_interpolation(
        self, interpolation: typing.Optional[InterpolationLike]
    ) -> Interpolation:
        if interpolation is None:
            return self.config.interpolation
        return to_interpolation(interpolation)

    def _blend_row(
        self, row: int, col_lower: int, col: int, offset: Numeric, span: Numeric
    ) -> Numeric:
        """Linear blend along one row between two adjacent columns."""
        values = self.values[row]
        return blend(
            base=values[col_lower],
            delta=values[col] - values[col_lower],
            offset=offset,
            span=span,
        )

    def _interpolate(
        self,
        horizontal_bracket: Bracket,
        vertical_bracket: Bracket,
        horizontal: Numeric,
        vertical: Numeric,
    ) -> Numeric:
        """
        Bilinear interpolation, horizontally within each row then vertically across rows.

        Axes that are not strictly between two breakpoints (exact hits or held at an edge)
        contribute a single fixed index and are not blended.
        """
        col = horizontal_bracket.index
        row = vertical_bracket.index

        if not horizontal_bracket.is_within and not vertical_bracket.is_within:
            return self.values[row][col]

        if horizontal_bracket.is_within:
            col_lower = typing.cast(int, horizontal_bracket.lower)
            offset_h = horizontal - self.horizontal_breakpoints[col_lower]
            span_h = (
                self.horizontal_breakpoints[col]
                - self.horizontal_breakpoints[col_lower]
            )
            if not vertical_bracket.is_within:
                return self._blend_row(row, col_lower, col, offset_h, span_h)

            row_lower = typing.cast(int, vertical_bracket.lower)
            low = self._blend_row(row_lower, col_lower, col, offset_h, span_h)
            high = self._blend_row(row, col_lower, col, offset_h, span_h)
        else:
            row_lower = typing.cast(int, vertical_bracket.lower)
            low = self.values[row_lower][col]
            high = self.values[row][col]

        return blend(
            base=low,
            delta=high - low,
            offset=vertical - self.vertical_breakpoints[row_lower],
            span=self.vertical_breakpoints[row] - self.vertical_breakpoints[row_lower],
        )
