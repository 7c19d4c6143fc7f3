"""Date utilities for ridecalc.

Pure functions for ISO week and month bucketing. Dates are handled as plain
calendar dates parsed from their YYYY-MM-DD strings; no timezone is involved.
"""

from datetime import date, datetime, timedelta

from ridecalc.domain.models import IsoDate, MonthKey, WeekKey


def today_iso() -> IsoDate:
    """Today's local calendar date."""
    return IsoDate(date.today().isoformat())


def parse_iso_date(value: str) -> date:
    """Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If the string is not a valid ISO calendar date.
    """
    return datetime.strptime(value, "%Y-%m-%d").date()


def iso_week(value: IsoDate) -> tuple[WeekKey, IsoDate, IsoDate]:
    """Calculate the ISO 8601 week key and its Monday-Sunday range.

    Weeks start on Monday and week 1 is the week holding the year's first
    Thursday, so days near New Year can belong to the neighbouring ISO year.

    Args:
        value: Date in YYYY-MM-DD format.

    Returns:
        Tuple of (key, start, end) where:
        - key: ISO year and zero-padded week (e.g., "2025-W01")
        - start: Monday of that week (YYYY-MM-DD)
        - end: Sunday of that week (YYYY-MM-DD)
    """
    day = parse_iso_date(value)
    iso_year, week, weekday = day.isocalendar()
    start = day - timedelta(days=weekday - 1)
    end = start + timedelta(days=6)
    key = WeekKey(f"{iso_year}-W{week:02d}")
    return key, IsoDate(start.isoformat()), IsoDate(end.isoformat())


def month_key(value: IsoDate) -> MonthKey:
    """Month bucket taken straight from the date string (e.g., "2025-01")."""
    year, month = value.split("-")[:2]
    return MonthKey(f"{year}-{month}")


def month_label(key: MonthKey) -> str:
    """Human-readable month (e.g., "January 2025").

    Raises:
        ValueError: If the key is not in YYYY-MM format.
    """
    return datetime.strptime(key, "%Y-%m").strftime("%B %Y")
