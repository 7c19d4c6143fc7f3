"""Tests for ridecalc.dates pure functions."""

import pytest

from ridecalc.dates import iso_week, month_key, month_label, parse_iso_date
from ridecalc.domain.models import IsoDate, MonthKey


class TestIsoWeek:
    """Tests for iso_week."""

    def test_mid_year_week(self) -> None:
        """Should key an ordinary date by ISO year and week."""
        key, start, end = iso_week(IsoDate("2024-03-01"))

        assert key == "2024-W09"
        assert start == "2024-02-26"
        assert end == "2024-03-03"

    def test_december_date_in_next_iso_year(self) -> None:
        """2024-12-30 belongs to 2025-W01."""
        key, start, end = iso_week(IsoDate("2024-12-30"))

        assert key == "2025-W01"
        assert start == "2024-12-30"
        assert end == "2025-01-05"

    def test_january_date_in_previous_iso_year(self) -> None:
        """2021-01-03 (a Sunday) belongs to 2020-W53."""
        key, start, _ = iso_week(IsoDate("2021-01-03"))

        assert key == "2020-W53"
        assert start == "2020-12-28"

    def test_sunday_closes_week(self) -> None:
        """Sunday is the last day of its ISO week, not the first of the next."""
        assert iso_week(IsoDate("2024-03-03"))[0] == iso_week(IsoDate("2024-02-26"))[0]
        assert iso_week(IsoDate("2024-03-04"))[0] == "2024-W10"

    def test_single_digit_week_is_padded(self) -> None:
        """Week numbers are zero-padded so keys sort correctly."""
        assert iso_week(IsoDate("2025-01-08"))[0] == "2025-W02"
        assert sorted(["2025-W10", "2025-W02"]) == ["2025-W02", "2025-W10"]

    def test_invalid_date_raises(self) -> None:
        """Should raise ValueError for malformed dates."""
        with pytest.raises(ValueError):
            iso_week(IsoDate("2024-02-30"))


class TestMonthHelpers:
    """Tests for month_key and month_label."""

    def test_month_key_from_string(self) -> None:
        """Should cut YYYY-MM from the date string."""
        assert month_key(IsoDate("2024-12-31")) == "2024-12"

    def test_month_label(self) -> None:
        """Should render the month name and year."""
        assert month_label(MonthKey("2025-01")) == "January 2025"
        assert month_label(MonthKey("2024-12")) == "December 2024"

    def test_invalid_month_raises(self) -> None:
        """Should raise ValueError for an invalid month number."""
        with pytest.raises(ValueError):
            month_label(MonthKey("2025-13"))


class TestParseIsoDate:
    """Tests for parse_iso_date."""

    def test_parses(self) -> None:
        """Should return a date object."""
        assert parse_iso_date("2024-02-29").day == 29

    def test_rejects_other_formats(self) -> None:
        """Only YYYY-MM-DD is accepted."""
        with pytest.raises(ValueError):
            parse_iso_date("29/02/2024")
