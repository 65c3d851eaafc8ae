"""Tests for null-tolerant arithmetic helpers."""
from __future__ import annotations

import itertools
import math

import pytest

from cpr.safe_math import pct_change, ratio, round_half_up, sum_safe


class TestSumSafe:
    def test_empty_is_zero(self):
        assert sum_safe([]) == 0

    def test_only_missing_values_is_zero(self):
        assert sum_safe([None, None, float("nan")]) == 0

    def test_missing_counts_as_zero(self):
        assert sum_safe([1, None, 2.5]) == 3.5

    def test_order_independent(self):
        values = [3, None, 7, 11, None, 0]
        expected = sum_safe(values)
        for perm in itertools.permutations(values):
            assert sum_safe(perm) == expected

    def test_accepts_generators(self):
        assert sum_safe(x for x in (1, 2, 3)) == 6


class TestRatio:
    @pytest.mark.parametrize("n", [0, 1, -5, 123.4])
    def test_zero_denominator_is_none(self, n):
        assert ratio(n, 0) is None

    @pytest.mark.parametrize("n", [0, 1, -5, 123.4])
    def test_absent_denominator_is_none(self, n):
        assert ratio(n, None) is None

    def test_nan_denominator_is_none(self):
        assert ratio(1, float("nan")) is None

    def test_plain_division(self):
        assert ratio(10, 100) == 0.1
        assert ratio(0, 4) == 0.0

    def test_never_produces_inf_or_nan(self):
        for n, d in [(1, 0), (0, 0), (-1, 0.0)]:
            r = ratio(n, d)
            assert r is None or math.isfinite(r)


class TestPctChange:
    def test_decrease(self):
        assert pct_change(500, 1000) == -0.5

    def test_increase(self):
        assert pct_change(150, 100) == 0.5

    def test_zero_previous_is_none(self):
        assert pct_change(10, 0) is None

    def test_missing_side_is_none(self):
        assert pct_change(None, 10) is None
        assert pct_change(10, None) is None


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected",
        [(1500.5, 1501), (2.5, 3), (0.5, 1), (1200.4, 1200), (799.6, 800), (7, 7), (-2.5, -3)],
    )
    def test_halves_go_away_from_zero(self, value, expected):
        assert round_half_up(value) == expected

    def test_missing(self):
        assert round_half_up(None) is None
        assert round_half_up(float("nan")) is None
