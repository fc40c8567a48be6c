"""
Tests for configuration, extrapolation warnings and array lookup precision.
"""
import logging

import attrs
import numpy as np
import pytest

from bptables import (
    Config,
    Extrapolation,
    Interpolation,
    OneDLookupTable,
    TwoDLookupTable,
    ValidationError,
    get_dtype,
    with_precision,
)


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.interpolation is Interpolation.LINEAR
        assert config.extrapolation is Extrapolation.ERROR
        assert config.warn_on_extrapolation is False

    def test_strings_are_converted(self):
        config = Config(interpolation="closest", extrapolation="linear")
        assert config.interpolation is Interpolation.CLOSEST
        assert config.extrapolation is Extrapolation.LINEAR

    def test_invalid_values(self):
        with pytest.raises(ValidationError):
            Config(interpolation="nearest")
        with pytest.raises(ValidationError):
            Config(extrapolation="clamp")

    def test_is_frozen(self):
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            Config().interpolation = Interpolation.FLOOR  # type: ignore[misc]


class TestExtrapolationWarnings:
    @pytest.fixture
    def table(self):
        return OneDLookupTable(
            breakpoints=[0, 5000],
            values=[0.0, 500.0],
            config=Config(extrapolation="hold_extreme", warn_on_extrapolation=True),
        )

    def test_warns_when_extrapolating(self, table, caplog):
        with caplog.at_level(logging.WARNING, logger="bptables"):
            assert table.lookup(6000) == 500.0
        assert "Extrapolating breakpoint 6000" in caplog.text

    def test_silent_inside_range(self, table, caplog):
        with caplog.at_level(logging.WARNING, logger="bptables"):
            table.lookup(2500)
            table.lookup(5000)
        assert caplog.records == []

    def test_silent_by_default(self, caplog):
        table = OneDLookupTable(breakpoints=[0, 1], values=[0.0, 1.0])
        with caplog.at_level(logging.WARNING, logger="bptables"):
            table.lookup(2, "linear")
        assert caplog.records == []

    def test_array_lookup_warns(self, table, caplog):
        with caplog.at_level(logging.WARNING, logger="bptables"):
            table.lookup_array([-1.0, 1.0, 6000.0])
        assert "Extrapolating 2 breakpoint(s)" in caplog.text

    def test_two_d_warns_when_holding(self, caplog):
        table = TwoDLookupTable(
            horizontal_breakpoints=[0, 1],
            vertical_breakpoints=[0, 1],
            values=[[0.0, 1.0], [1.0, 2.0]],
            config=Config(warn_on_extrapolation=True),
        )
        with caplog.at_level(logging.WARNING, logger="bptables"):
            assert table.lookup(5, 0.5) == pytest.approx(1.5)
        assert "Holding breakpoints" in caplog.text

    def test_build_is_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="bptables"):
            OneDLookupTable(breakpoints=[0, 1, 2], values=[0, 1, 2])
        assert "Built 1-D lookup table with 3 breakpoints" in caplog.text


class TestPrecision:
    def test_default_dtype(self):
        assert get_dtype() == np.float64

    def test_table_built_with_32bit_precision(self):
        with with_precision(np.float32):
            table = OneDLookupTable(breakpoints=[0, 5000], values=[0.0, 500.0])
        # The precision is captured when the table is built
        assert get_dtype() == np.float64
        result = table.lookup_array([2500, 6000], extrapolation="linear")
        assert result.dtype == np.float32
        np.testing.assert_allclose(result, [250.0, 600.0])

    def test_two_d_32bit_precision(self):
        with with_precision(np.float32):
            table = TwoDLookupTable(
                horizontal_breakpoints=[0, 500, 1000],
                vertical_breakpoints=[0, 3, 6],
                values=[[3.0, 4.2, 5.5], [4.2, 5.0, 6.0], [5.0, 5.8, 6.5]],
            )
        result = table.lookup_array([750], [4])
        assert result.dtype == np.float32
        np.testing.assert_allclose(result, [5.7166667], rtol=1e-5)
