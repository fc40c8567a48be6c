from fractions import Fraction

import numpy as np
import pytest

from bptables.arithmetic import blend, divide, is_integral


class TestIsIntegral:
    @pytest.mark.parametrize("value", [0, -3, np.int16(4), np.int64(-9)])
    def test_integers(self, value):
        assert is_integral(value)

    @pytest.mark.parametrize("value", [0.5, 1.0, np.float32(2), Fraction(1, 2), True])
    def test_non_integers(self, value):
        assert not is_integral(value)


class TestDivide:
    def test_integer_division_truncates(self):
        assert divide(7, 2) == 3

    def test_negative_integer_division_truncates_toward_zero(self):
        assert divide(-7, 3) == -2
        assert divide(7, -3) == -2
        assert divide(-7, -3) == 2

    def test_float_division(self):
        assert divide(7, 2.0) == 3.5

    def test_fraction_division_is_exact(self):
        assert divide(Fraction(1), 3) == Fraction(1, 3)

    def test_numpy_integers_truncate(self):
        assert divide(np.int64(-5), np.int64(2)) == -2


class TestBlend:
    def test_interpolates(self):
        assert blend(base=0.0, delta=500.0, offset=1500, span=4000) == 187.5

    def test_integer_blend_stays_integer(self):
        result = blend(base=0, delta=500, offset=3995, span=4000)
        assert result == 499
        assert isinstance(result, int)

    def test_extrapolates_with_negative_offset(self):
        assert blend(base=10.0, delta=10.0, offset=-1.0, span=1.0) == 0.0
