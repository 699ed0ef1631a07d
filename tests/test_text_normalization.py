"""
Unit tests for text_normalization module.

Tests the cell types openpyxl and JSON clients actually hand over.
"""

import math
from datetime import date, datetime

import pytest
from app.core.text_normalization import (
    collapse_whitespace,
    has_person_shape,
    looks_like_email,
    normalize_cell,
    title_case,
)


class TestNormalizeCell:
    """Any raw cell -> trimmed string."""

    def test_none(self):
        assert normalize_cell(None) is None

    def test_whole_float_drops_decimal(self):
        assert normalize_cell(9876543210.0) == "9876543210"

    def test_fractional_float(self):
        assert normalize_cell(4.5) == "4.5"

    def test_int(self):
        assert normalize_cell(30) == "30"

    def test_nan(self):
        assert normalize_cell(math.nan) is None

    def test_bool(self):
        assert normalize_cell(True) == "true"

    def test_dates(self):
        assert normalize_cell(date(2024, 1, 5)) == "2024-01-05"
        assert normalize_cell(datetime(2024, 1, 5, 10, 30)) == "2024-01-05T10:30:00"

    def test_whitespace_collapsed(self):
        assert normalize_cell("  Priya \t Singh\n") == "Priya Singh"

    def test_non_breaking_space(self):
        assert normalize_cell("Priya\u00a0Singh") == "Priya Singh"


class TestShapes:

    def test_collapse_whitespace(self):
        assert collapse_whitespace(" a   b ") == "a b"

    @pytest.mark.parametrize("text", ["Priya Singh", "O'Brien", "Anne-Marie", "R. K. Das", "Zoë Müller"])
    def test_person_shape(self, text):
        assert has_person_shape(text)

    @pytest.mark.parametrize("text", ["Rahul2", "a_b", "x@y"])
    def test_not_person_shape(self, text):
        assert not has_person_shape(text)

    def test_email(self):
        assert looks_like_email("a@b.co")
        assert not looks_like_email("a@b")
        assert not looks_like_email("a b@c.in")


class TestTitleCase:

    def test_basic(self):
        assert title_case("rahul  SHARMA") == "Rahul Sharma"

    def test_apostrophe_not_split(self):
        assert title_case("o'brien") == "O'brien"
