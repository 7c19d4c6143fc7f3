"""Pure functions for report calculations and aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Every view is computed from the full record set. An empty record set yields
an empty list (or None for the overall view) so callers can show a proper
"no data" state instead of a row of zeros.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ridecalc.dates import iso_week, month_key, month_label
from ridecalc.domain.models import IsoDate, Km, Money
from ridecalc.domain.records import DailyRecord, DailyReport, create_daily_report, safe_percentage, safe_ratio


@dataclass(frozen=True)
class PeriodReport:
    """Immutable aggregate over a group of daily records."""

    key: str
    label: str
    days: int
    km: Km
    uber: Money
    n99: Money
    other_income: Money
    fuel: Money
    total_income: Money
    total_expenses: Money
    start: IsoDate | None = None
    end: IsoDate | None = None

    @property
    def profit(self) -> Money:
        return Money(self.total_income - self.total_expenses)

    @property
    def profit_per_km(self) -> float:
        return safe_ratio(self.profit, self.km)

    @property
    def margin(self) -> float:
        return safe_percentage(self.profit, self.total_income)

    @property
    def avg_profit_per_day(self) -> float:
        return safe_ratio(self.profit, self.days)

    @property
    def avg_km_per_day(self) -> float:
        return safe_ratio(self.km, self.days)

    @property
    def uber_share(self) -> float:
        return safe_percentage(self.uber, self.total_income)

    @property
    def n99_share(self) -> float:
        return safe_percentage(self.n99, self.total_income)

    @property
    def other_share(self) -> float:
        return safe_percentage(self.other_income, self.total_income)


def summarize_records(
    key: str,
    label: str,
    records: list[DailyRecord],
    start: IsoDate | None = None,
    end: IsoDate | None = None,
) -> PeriodReport:
    """Sum a group of records into a single period report.

    Args:
        key: Bucket key (week, month or "all").
        label: Human-readable bucket label.
        records: Member records.
        start: Optional first date covered by the bucket.
        end: Optional last date covered by the bucket.

    Returns:
        PeriodReport with totals; ratios are derived lazily.
    """
    return PeriodReport(
        key=key,
        label=label,
        days=len(records),
        km=Km(sum(r.km for r in records)),
        uber=Money(sum(r.uber for r in records)),
        n99=Money(sum(r.n99 for r in records)),
        other_income=Money(sum(r.other_income for r in records)),
        fuel=Money(sum(r.fuel for r in records)),
        total_income=Money(sum(r.total_income for r in records)),
        total_expenses=Money(sum(r.total_expenses for r in records)),
        start=start,
        end=end,
    )


def group_records(
    records: Iterable[DailyRecord],
    key_func: Callable[[DailyRecord], str],
) -> dict[str, list[DailyRecord]]:
    """Group records into buckets by key, preserving input order inside each."""
    groups: dict[str, list[DailyRecord]] = {}
    for record in records:
        groups.setdefault(key_func(record), []).append(record)
    return groups


def daily_view(records: Iterable[DailyRecord]) -> list[DailyReport]:
    """Every record with its derived metrics, newest date first."""
    ordered = sorted(records, key=lambda r: r.date, reverse=True)
    return [create_daily_report(r) for r in ordered]


def weekly_view(records: Iterable[DailyRecord]) -> list[PeriodReport]:
    """Aggregate records by ISO 8601 week, newest week first.

    Keys are fixed-width ("2025-W03"), so sorting them as strings is
    chronological.
    """
    weeks = group_records(records, lambda r: iso_week(r.date)[0])

    reports = []
    for key in sorted(weeks, reverse=True):
        members = weeks[key]
        _, start, end = iso_week(members[0].date)
        label = f"{start[8:10]}/{start[5:7]} - {end[8:10]}/{end[5:7]}"
        reports.append(summarize_records(key, label, members, start, end))
    return reports


def monthly_view(records: Iterable[DailyRecord]) -> list[PeriodReport]:
    """Aggregate records by calendar month, newest month first."""
    months = group_records(records, lambda r: month_key(r.date))

    return [summarize_records(key, month_label(key), months[key]) for key in sorted(months, reverse=True)]


def overall_view(records: Iterable[DailyRecord]) -> PeriodReport | None:
    """Aggregate every record, or None when there are no records."""
    members = sorted(records, key=lambda r: r.date)
    if not members:
        return None
    return summarize_records("all", "All time", members, members[0].date, members[-1].date)
