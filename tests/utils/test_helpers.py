"""Tests for numeric parsing and fallback helpers."""

import math

import pytest

from fpl_predictor.utils import mean_or_zero, safe_divide, safe_float, safe_int


class TestSafeFloat:
    """Tests for tolerant float parsing."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("0.45", 0.45), (3, 3.0), (2.5, 2.5), ("  1.5 ", 1.5)],
    )
    def test_parses_numeric_values(self, raw, expected):
        """Numeric strings and numbers parse to floats."""
        assert safe_float(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "abc", math.nan, math.inf, [1]])
    def test_falls_back_to_default(self, raw):
        """Nulls, garbage and non-finite values return the default."""
        assert safe_float(raw) == 0.0
        assert safe_float(raw, default=-1.0) == -1.0


class TestSafeInt:
    def test_truncates_and_defaults(self):
        assert safe_int("7") == 7
        assert safe_int(3.9) == 3
        assert safe_int(None) == 0
        assert safe_int("x", default=5) == 5


class TestSafeDivide:
    def test_zero_denominator_uses_fallback(self):
        """Division by zero returns the fallback instead of raising."""
        assert safe_divide(5, 0) == 0.0
        assert safe_divide(5, 0, fallback=1.0) == 1.0
        assert safe_divide(6, 3) == 2.0


class TestMeanOrZero:
    def test_empty_is_zero(self):
        assert mean_or_zero([]) == 0.0
        assert mean_or_zero(x for x in []) == 0.0

    def test_mean(self):
        assert mean_or_zero([1, 2, 3, 6]) == 3.0
