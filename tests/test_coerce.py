"""Tests for boundary coercion of stored values."""

import pytest

from qame.aggregation.coerce import (
    UNSPECIFIED,
    coerce_rating,
    comment_text,
    distribution_key,
    normalize_day,
)


class TestCoerceRating:
    """coerce_rating."""

    @pytest.mark.parametrize(("raw", "expected"), [(4, 4.0), (3.5, 3.5), ("2", 2.0), (" 5 ", 5.0)])
    def test_numeric_values(self, raw, expected):
        """Numbers and numeric strings convert."""
        assert coerce_rating(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "four", True, False, float("nan"), "inf", [4], {}])
    def test_rejected_values(self, raw):
        """Anything that is not a finite number is rejected."""
        assert coerce_rating(raw) is None


class TestNormalizeDay:
    """normalize_day."""

    @pytest.mark.parametrize(("raw", "expected"), [(1, 1), ("2", 2), (3.0, 3), ("3.0", 3)])
    def test_recognized_days(self, raw, expected):
        """Days 1-3 in any numeric form."""
        assert normalize_day(raw) == expected

    @pytest.mark.parametrize("raw", [None, 0, 4, -1, 1.5, "day 1", "", True])
    def test_unrecognized_days(self, raw):
        """Everything else is no day."""
        assert normalize_day(raw) is None


class TestDistributionKey:
    """distribution_key."""

    def test_literal_value_is_key(self):
        """Values are not normalized, so " Male " and "Male" are distinct keys."""
        assert distribution_key(" Male ") == " Male "
        assert distribution_key("Male") == "Male"

    @pytest.mark.parametrize("raw", [None, "", "  ", 3])
    def test_missing_is_unspecified(self, raw):
        """Missing or non-text values are Unspecified."""
        assert distribution_key(raw) == UNSPECIFIED


class TestCommentText:
    """comment_text."""

    def test_text_returned_unchanged(self):
        """Non-blank text passes through."""
        assert comment_text(" ok ") == " ok "

    @pytest.mark.parametrize("raw", [None, "", "   ", 42])
    def test_blank_is_none(self, raw):
        """Blank or non-text comments are dropped."""
        assert comment_text(raw) is None
