"""Tests for ridecalc.domain.records pure functions."""

import pytest

from ridecalc.domain.errors import ValidationError
from ridecalc.domain.models import IsoDate
from ridecalc.domain.records import DailyRecord, create_daily_report, safe_percentage, safe_ratio


def make_record(**overrides) -> DailyRecord:
    fields = {
        "date": IsoDate("2024-03-01"),
        "km": 200,
        "uber": 150,
        "n99": 50,
        "other_income": 0,
        "fuel": 40,
        "other_expense": 10,
    }
    fields.update(overrides)
    return DailyRecord(**fields)


class TestSafeRatio:
    """Tests for safe_ratio and safe_percentage."""

    def test_divides_normally(self) -> None:
        """Should return the plain quotient."""
        assert safe_ratio(150, 200) == 0.75

    def test_zero_denominator_returns_zero(self) -> None:
        """Should return 0 instead of raising."""
        assert safe_ratio(150, 0) == 0.0

    def test_none_denominator_returns_zero(self) -> None:
        """Should treat a missing denominator as zero."""
        assert safe_ratio(150, None) == 0.0  # type: ignore[arg-type]

    def test_percentage(self) -> None:
        """Should scale the ratio to a percentage."""
        assert safe_percentage(50, 200) == 25.0
        assert safe_percentage(50, 0) == 0.0


class TestDailyRecord:
    """Tests for DailyRecord derived values."""

    def test_scenario_totals(self) -> None:
        """Should derive income, expenses and profit from the raw amounts."""
        record = make_record()

        assert record.total_income == 200
        assert record.total_expenses == 50
        assert record.profit == 150

    def test_profit_identity(self) -> None:
        """Profit is always income minus expenses."""
        record = make_record(uber=12.5, n99=0, other_income=7.25, fuel=30, other_expense=1.5)

        assert record.total_income == record.uber + record.n99 + record.other_income
        assert record.profit == pytest.approx(record.total_income - record.total_expenses)

    def test_savings_amount(self) -> None:
        """Should take the configured share of profit."""
        assert make_record().savings_amount(10) == pytest.approx(15.0)

    def test_defaults_to_not_saved(self) -> None:
        """New records start uncommitted."""
        assert DailyRecord(date=IsoDate("2024-03-01")).saved_to_reserve is False

    def test_rejects_negative_amounts(self) -> None:
        """Should refuse negative money or distance."""
        with pytest.raises(ValidationError):
            make_record(fuel=-1)
        with pytest.raises(ValidationError):
            make_record(km=-5)

    def test_with_saved_returns_copy(self) -> None:
        """Should leave the original untouched."""
        record = make_record()
        saved = record.with_saved(True)

        assert saved.saved_to_reserve is True
        assert record.saved_to_reserve is False


class TestRecordSerialisation:
    """Tests for DailyRecord.to_dict / from_dict."""

    def test_to_dict_includes_derived_fields(self) -> None:
        """Should write totals and profit for readers of the raw payload."""
        data = make_record().to_dict()

        assert data["total_income"] == 200
        assert data["total_expenses"] == 50
        assert data["profit"] == 150
        assert data["saved_to_reserve"] is False

    def test_from_dict_recomputes_derived_fields(self) -> None:
        """Should ignore stale derived values in the payload."""
        record = DailyRecord.from_dict({"date": "2024-03-01", "uber": 100, "fuel": 20, "profit": 999})

        assert record.profit == 80

    def test_missing_flag_loads_as_none(self) -> None:
        """Old entries without the flag keep None."""
        record = DailyRecord.from_dict({"date": "2024-03-01", "uber": 100})

        assert record.saved_to_reserve is None

    def test_missing_amounts_default_to_zero(self) -> None:
        """Should default absent or empty amounts to 0."""
        record = DailyRecord.from_dict({"date": "2024-03-01", "km": "", "n99": None})

        assert record.km == 0
        assert record.n99 == 0

    def test_missing_date_raises(self) -> None:
        """Should reject entries without a date."""
        with pytest.raises(ValidationError):
            DailyRecord.from_dict({"uber": 100})

    @pytest.mark.parametrize("date", ["01/03/2024", "garbage", "2024-02-30"])
    def test_malformed_date_raises(self, date: str) -> None:
        """Should reject dates that are not valid YYYY-MM-DD."""
        with pytest.raises(ValidationError):
            DailyRecord.from_dict({"date": date, "uber": 100})

    def test_unpadded_date_is_normalised(self) -> None:
        """Should store the canonical ISO form."""
        assert DailyRecord.from_dict({"date": "2024-3-1"}).date == "2024-03-01"

    def test_non_numeric_amount_raises(self) -> None:
        """Should reject amounts that are not numbers."""
        with pytest.raises(ValidationError):
            DailyRecord.from_dict({"date": "2024-03-01", "uber": "lots"})


class TestCreateDailyReport:
    """Tests for create_daily_report."""

    def test_metrics(self) -> None:
        """Should compute profit/km, margin and platform shares."""
        report = create_daily_report(make_record())

        assert report.profit_per_km == pytest.approx(0.75)
        assert report.margin == pytest.approx(75.0)
        assert report.uber_share == pytest.approx(75.0)
        assert report.n99_share == pytest.approx(25.0)
        assert report.other_share == 0.0

    def test_zero_km_gives_zero_profit_per_km(self) -> None:
        """A day without distance should not divide by zero."""
        report = create_daily_report(make_record(km=0))

        assert report.profit_per_km == 0.0

    def test_zero_income_gives_zero_ratios(self) -> None:
        """A day without income has zero margin and shares."""
        report = create_daily_report(make_record(uber=0, n99=0, other_income=0))

        assert report.margin == 0.0
        assert report.uber_share == 0.0
        assert report.n99_share == 0.0
        assert report.other_share == 0.0
