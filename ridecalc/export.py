"""CSV export of daily records."""

from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from ridecalc.domain.errors import NothingToExportError
from ridecalc.domain.records import DailyRecord

EXPORT_COLUMNS = ["Date", "KM", "Uber", "99", "Other income", "Fuel", "Other expense", "Profit"]


def records_to_frame(records: Iterable[DailyRecord]) -> pd.DataFrame:
    """Tabulate records in the fixed export column order, oldest first.

    Raises:
        NothingToExportError: If there are no records.
    """
    rows = [
        [r.date, r.km, r.uber, r.n99, r.other_income, r.fuel, r.other_expense, r.profit]
        for r in sorted(records, key=lambda r: r.date)
    ]
    if not rows:
        raise NothingToExportError("Nothing to export")
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def records_to_csv(records: Iterable[DailyRecord]) -> str:
    """Render records as CSV text with a header row."""
    return records_to_frame(records).to_csv(index=False)


def export_records(records: Iterable[DailyRecord], path: Path) -> int:
    """Write records to a CSV file.

    Args:
        records: Records to export.
        path: Destination file; parent directories are created.

    Returns:
        Number of rows written.

    Raises:
        NothingToExportError: If there are no records.
    """
    df = records_to_frame(records)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return len(df)
