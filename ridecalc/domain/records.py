"""Pure functions for daily records and their per-day metrics.

This module contains the functional core for daily entries:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Totals and profit are always derived from the raw amounts, never stored.
"""

from dataclasses import dataclass, replace
from typing import Any

from ridecalc.dates import parse_iso_date
from ridecalc.domain.errors import ValidationError
from ridecalc.domain.models import IsoDate, Km, Money


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is zero or missing.

    Args:
        numerator: Value to divide.
        denominator: Value to divide by.

    Returns:
        The quotient, or 0.0 when the denominator is not positive.
    """
    if not denominator or denominator <= 0:
        return 0.0
    return numerator / denominator


def safe_percentage(part: float, whole: float) -> float:
    """Percentage of part in whole with the same zero guard as safe_ratio."""
    return safe_ratio(part, whole) * 100


def parse_flag(value: Any) -> bool:
    """Read a persisted boolean. Strings count as True only for "true", "1" or "yes"."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


@dataclass(frozen=True)
class DailyRecord:
    """Immutable income/expense entry for one calendar day."""

    date: IsoDate
    km: Km = Km(0.0)
    uber: Money = Money(0.0)
    n99: Money = Money(0.0)
    other_income: Money = Money(0.0)
    fuel: Money = Money(0.0)
    other_expense: Money = Money(0.0)
    # None means the entry was written before the flag existed
    saved_to_reserve: bool | None = False

    def __post_init__(self) -> None:
        for name in ("km", "uber", "n99", "other_income", "fuel", "other_expense"):
            if getattr(self, name) < 0:
                raise ValidationError(f"{name} must not be negative")

    @property
    def total_income(self) -> Money:
        return Money(self.uber + self.n99 + self.other_income)

    @property
    def total_expenses(self) -> Money:
        return Money(self.fuel + self.other_expense)

    @property
    def profit(self) -> Money:
        return Money(self.total_income - self.total_expenses)

    def savings_amount(self, savings_percentage: float) -> Money:
        """Slice of this day's profit earmarked for the reserve."""
        return Money(self.profit * (savings_percentage / 100))

    def with_saved(self, saved: bool) -> "DailyRecord":
        return replace(self, saved_to_reserve=saved)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the persisted record shape (derived fields included)."""
        return {
            "date": self.date,
            "km": self.km,
            "uber": self.uber,
            "n99": self.n99,
            "other_income": self.other_income,
            "fuel": self.fuel,
            "other_expense": self.other_expense,
            "total_income": self.total_income,
            "total_expenses": self.total_expenses,
            "profit": self.profit,
            "saved_to_reserve": self.saved_to_reserve,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DailyRecord":
        """Build a record from a persisted dict.

        Derived fields in the payload are ignored and recomputed. A missing
        ``saved_to_reserve`` stays None so older entries still count as saved.

        Raises:
            ValidationError: If the date is missing or malformed, or an amount is invalid.
        """
        date = data.get("date")
        if not date or not isinstance(date, str):
            raise ValidationError("record has no date")
        try:
            date = parse_iso_date(date).isoformat()
        except ValueError as e:
            raise ValidationError(f"record date is not YYYY-MM-DD: {date!r}") from e

        def amount(key: str) -> float:
            value = data.get(key)
            if value is None or value == "":
                return 0.0
            try:
                return float(value)
            except (TypeError, ValueError) as e:
                raise ValidationError(f"{key} is not a number: {value!r}") from e

        saved = data.get("saved_to_reserve")
        return cls(
            date=IsoDate(date),
            km=Km(amount("km")),
            uber=Money(amount("uber")),
            n99=Money(amount("n99")),
            other_income=Money(amount("other_income")),
            fuel=Money(amount("fuel")),
            other_expense=Money(amount("other_expense")),
            saved_to_reserve=None if saved is None else parse_flag(saved),
        )


@dataclass(frozen=True)
class DailyReport:
    """Immutable per-day view with derived metrics."""

    record: DailyRecord
    profit_per_km: float
    margin: float
    uber_share: float
    n99_share: float
    other_share: float


def create_daily_report(record: DailyRecord) -> DailyReport:
    """Compute the derived metrics for a single day.

    Args:
        record: Daily record.

    Returns:
        DailyReport with zero-guarded ratios.
    """
    income = record.total_income
    return DailyReport(
        record=record,
        profit_per_km=safe_ratio(record.profit, record.km),
        margin=safe_percentage(record.profit, income),
        uber_share=safe_percentage(record.uber, income),
        n99_share=safe_percentage(record.n99, income),
        other_share=safe_percentage(record.other_income, income),
    )
