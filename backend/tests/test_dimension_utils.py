"""
test_dimension_utils.py — Input validation and number helpers shared by the geometry engines.
"""

import math

import pytest

from kanaf.models.estimate_models import MaterialResult
from kanaf.services.dimension_utils import (
    keep_positive,
    normalize_digits,
    positive_dimension,
    round_half_up,
    to_persian_digits,
)


class TestPositiveDimension:

    @pytest.mark.parametrize("value,expected", [
        (4, 4.0),
        (2.5, 2.5),
        ("3", 3.0),
        (" 3.5 ", 3.5),
        ("۴", 4.0),
        ("۲٫۵", 2.5),
    ])
    def test_accepted(self, value, expected):
        assert positive_dimension(value) == expected

    @pytest.mark.parametrize("value", [
        None, "", "   ", "abc", 0, -1, "-2", math.nan, math.inf, True, [4],
    ])
    def test_rejected(self, value):
        assert positive_dimension(value) is None


class TestRounding:

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (2.49, 2),
        (48.88, 49),
        (0.0, 0),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_differs_from_bankers_rounding(self):
        assert round(2.5) == 2
        assert round_half_up(2.5) == 3


class TestDigits:

    def test_normalize(self):
        assert normalize_digits("۱۲٫۵ و ٣") == "12.5 و 3"

    @pytest.mark.parametrize("value,expected", [
        (8, "۸"),
        (8.0, "۸"),
        (2.5, "۲٫۵"),
        (12, "۱۲"),
    ])
    def test_to_persian(self, value, expected):
        assert to_persian_digits(value) == expected


def test_keep_positive_drops_zero_lines():
    results = [MaterialResult("a", 1, "عدد"), MaterialResult("b", 0, "عدد")]
    assert [r.material for r in keep_positive(results)] == ["a"]
