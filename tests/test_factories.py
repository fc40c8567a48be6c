"""
Tests for table construction: builders and construction-time validation.
"""
import numpy as np
import pytest

from bptables import (
    Config,
    Extrapolation,
    Interpolation,
    OneDLookupTable,
    TwoDLookupTable,
    ValidationError,
    build_one_d_table,
    build_two_d_table,
)
from bptables.validation import validate_breakpoints


class TestValidateBreakpoints:
    def test_ascending_passes(self):
        validate_breakpoints([0, 1, 2.5])

    @pytest.mark.parametrize(
        "breakpoints",
        [[4, 3, 2, 1], [1, 2, 3, 2], [0, 1, 1, 2]],
        ids=["descending", "unsorted", "duplicate"],
    )
    def test_not_strictly_ascending(self, breakpoints):
        with pytest.raises(ValidationError, match="strictly ascending"):
            validate_breakpoints(breakpoints)

    @pytest.mark.parametrize("breakpoints", [[], [1]])
    def test_too_short(self, breakpoints):
        with pytest.raises(ValidationError, match="At least 2"):
            validate_breakpoints(breakpoints)

    def test_nan_is_rejected(self):
        with pytest.raises(ValidationError):
            validate_breakpoints([0.0, float("nan"), 2.0])


class TestBuildOneDTable:
    def test_builds_table(self):
        table = build_one_d_table([0, 500, 4500, 5000], [0.0, 0.0, 500.0, 500.0])
        assert isinstance(table, OneDLookupTable)
        assert table.lookup(2000) == 187.5

    def test_accepts_numpy_arrays(self):
        table = build_one_d_table(np.linspace(0.0, 1.0, 5), np.arange(5))
        assert len(table) == 5
        assert table.lookup(0.25) == 1

    def test_option_overrides(self):
        base = Config(interpolation="floor")
        table = build_one_d_table(
            [0, 10], [0, 100], config=base, extrapolation="hold_extreme"
        )
        assert table.config.interpolation is Interpolation.FLOOR
        assert table.config.extrapolation is Extrapolation.HOLD_EXTREME
        assert table.lookup(20) == 100
        # The base config is left untouched
        assert base.extrapolation is Extrapolation.ERROR

    def test_length_mismatch(self):
        with pytest.raises(ValidationError, match="same length"):
            build_one_d_table([0, 1, 2], [0, 1])

    def test_unsorted(self):
        with pytest.raises(ValidationError):
            build_one_d_table([0, 2, 1], [0, 1, 2])

    def test_single_breakpoint(self):
        with pytest.raises(ValidationError):
            build_one_d_table([0], [1])

    def test_not_a_sequence(self):
        with pytest.raises(ValidationError):
            build_one_d_table(5, [1])  # type: ignore[arg-type]

    def test_invalid_policy_name(self):
        with pytest.raises(ValidationError):
            build_one_d_table([0, 1], [0, 1], interpolation="spline")


class TestBuildTwoDTable:
    def test_builds_table(self):
        table = build_two_d_table(
            [0, 500, 1000],
            [0, 3, 6],
            [[3.0, 4.2, 5.5], [4.2, 5.0, 6.0], [5.0, 5.8, 6.5]],
            interpolation="closest",
        )
        assert isinstance(table, TwoDLookupTable)
        assert table.config.interpolation is Interpolation.CLOSEST
        assert table.lookup(750, 4) == 6.0

    def test_accepts_numpy_matrix(self):
        table = build_two_d_table([0, 1], [0, 1, 2], np.arange(6).reshape(3, 2))
        assert table.shape == (3, 2)
        assert table.values == ((0, 1), (2, 3), (4, 5))

    def test_wrong_row_count(self):
        with pytest.raises(ValidationError, match="row per vertical"):
            build_two_d_table([0, 1], [0, 1, 2], [[0, 1], [2, 3]])

    def test_ragged_rows(self):
        with pytest.raises(ValidationError, match="row 1"):
            build_two_d_table([0, 1], [0, 1], [[0, 1], [2, 3, 4]])

    def test_flat_values(self):
        with pytest.raises(ValidationError):
            build_two_d_table([0, 1], [0, 1], [0, 1, 2, 3])

    @pytest.mark.parametrize(
        "horizontal, vertical",
        [([0, 0], [0, 1]), ([0, 1], [1, 0]), ([0], [0, 1])],
    )
    def test_invalid_axes(self, horizontal, vertical):
        with pytest.raises(ValidationError):
            build_two_d_table(horizontal, vertical, [[0, 1], [2, 3]])
