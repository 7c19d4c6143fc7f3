"""Tests for ridecalc.domain.report pure functions."""

import pytest

from ridecalc.domain.models import IsoDate, Km, Money
from ridecalc.domain.records import DailyRecord
from ridecalc.domain.report import daily_view, monthly_view, overall_view, summarize_records, weekly_view


def day(date: str, km: float = 100, uber: float = 100, n99: float = 50, other: float = 0, fuel: float = 30) -> DailyRecord:
    return DailyRecord(
        date=IsoDate(date),
        km=Km(km),
        uber=Money(uber),
        n99=Money(n99),
        other_income=Money(other),
        fuel=Money(fuel),
    )


SAMPLE = [
    day("2024-12-28", km=120, uber=200),
    day("2024-12-30", km=80, uber=90, n99=0),
    day("2025-01-02", km=150, other=40, fuel=45),
    day("2025-01-06", km=0, uber=0, n99=0, fuel=10),
    day("2025-02-14", km=210, uber=310, n99=20),
]


class TestEmptyViews:
    """Every view reports an explicit empty state."""

    def test_all_views_empty(self) -> None:
        """Should return empty lists and None for no records."""
        assert daily_view([]) == []
        assert weekly_view([]) == []
        assert monthly_view([]) == []
        assert overall_view([]) is None


class TestDailyView:
    """Tests for daily_view."""

    def test_newest_first(self) -> None:
        """Should order days by date descending."""
        dates = [r.record.date for r in daily_view(SAMPLE)]

        assert dates == ["2025-02-14", "2025-01-06", "2025-01-02", "2024-12-30", "2024-12-28"]

    def test_zero_day_metrics(self) -> None:
        """A day without km or income yields zero ratios."""
        report = next(r for r in daily_view(SAMPLE) if r.record.date == "2025-01-06")

        assert report.profit_per_km == 0.0
        assert report.margin == 0.0
        assert report.uber_share == 0.0


class TestWeeklyView:
    """Tests for weekly_view."""

    def test_iso_weeks_across_year_boundary(self) -> None:
        """Should put 2024-12-30 and 2025-01-02 in 2025-W01."""
        keys = [w.key for w in weekly_view(SAMPLE)]

        assert keys == ["2025-W07", "2025-W02", "2025-W01", "2024-W52"]

    def test_bucket_totals(self) -> None:
        """Should sum members and derive metrics."""
        week = next(w for w in weekly_view(SAMPLE) if w.key == "2025-W01")

        assert week.days == 2
        assert week.km == 230
        assert week.total_income == 90 + 190
        assert week.total_expenses == 30 + 45
        assert week.profit == 280 - 75
        assert week.profit_per_km == pytest.approx(205 / 230)
        assert week.avg_profit_per_day == pytest.approx(102.5)
        assert week.other_share == pytest.approx(40 / 280 * 100)

    def test_week_range(self) -> None:
        """Should carry the Monday-Sunday range and a short label."""
        week = next(w for w in weekly_view(SAMPLE) if w.key == "2025-W01")

        assert week.start == "2024-12-30"
        assert week.end == "2025-01-05"
        assert week.label == "30/12 - 05/01"

    def test_zero_income_week(self) -> None:
        """A week with no income has zero margin and shares."""
        week = next(w for w in weekly_view(SAMPLE) if w.key == "2025-W02")

        assert week.total_income == 0
        assert week.margin == 0.0
        assert week.uber_share == 0.0
        assert week.n99_share == 0.0
        assert week.other_share == 0.0
        assert week.profit_per_km == 0.0


class TestMonthlyView:
    """Tests for monthly_view."""

    def test_groups_by_calendar_month(self) -> None:
        """Should key by YYYY-MM from the date string, newest first."""
        months = monthly_view(SAMPLE)

        assert [m.key for m in months] == ["2025-02", "2025-01", "2024-12"]
        assert [m.label for m in months] == ["February 2025", "January 2025", "December 2024"]

    def test_average_km_per_day(self) -> None:
        """Should average distance over member days."""
        december = monthly_view(SAMPLE)[-1]

        assert december.days == 2
        assert december.avg_km_per_day == pytest.approx(100.0)
        assert december.fuel == 60


class TestOverallView:
    """Tests for overall_view."""

    def test_totals(self) -> None:
        """Should aggregate every record."""
        overall = overall_view(SAMPLE)

        assert overall is not None
        assert overall.days == 5
        assert overall.km == 560
        assert overall.start == "2024-12-28"
        assert overall.end == "2025-02-14"
        assert overall.avg_km_per_day == pytest.approx(112.0)

    def test_bucket_sums_match_overall(self) -> None:
        """Weekly and monthly buckets add up to the overall totals."""
        overall = overall_view(SAMPLE)
        assert overall is not None

        for buckets in (weekly_view(SAMPLE), monthly_view(SAMPLE)):
            assert sum(b.km for b in buckets) == pytest.approx(overall.km)
            assert sum(b.total_income for b in buckets) == pytest.approx(overall.total_income)
            assert sum(b.total_expenses for b in buckets) == pytest.approx(overall.total_expenses)
            assert sum(b.days for b in buckets) == overall.days

    def test_shares_add_up(self) -> None:
        """Platform shares cover all income."""
        overall = overall_view(SAMPLE)
        assert overall is not None

        assert overall.uber_share + overall.n99_share + overall.other_share == pytest.approx(100.0)


class TestSummarizeRecords:
    """Tests for summarize_records."""

    def test_empty_group_is_all_zero(self) -> None:
        """Should not divide by zero for an empty group."""
        report = summarize_records("x", "x", [])

        assert report.avg_profit_per_day == 0.0
        assert report.avg_km_per_day == 0.0
        assert report.margin == 0.0
