"""Helpers shared by the command modules."""

import sys
from typing import Any

import pandas as pd
from rich.console import Console

from ridecalc.config import load_settings
from ridecalc.dates import today_iso
from ridecalc.domain.models import IsoDate
from ridecalc.store import LedgerStore, SqlitePersistence, get_db_path

console = Console()


def open_store() -> LedgerStore:
    """Open the ledger store backed by the configured database."""
    return LedgerStore(SqlitePersistence(get_db_path()))


def get_settings() -> dict[str, Any]:
    return load_settings()


def normalize_date(value: str | None) -> IsoDate:
    """Turn user input into an ISO date.

    Accepts "today" (or nothing), YYYY-MM-DD, DD/MM/YYYY and the other
    formats pandas understands, reading ambiguous dates day-first.
    Exits with an error message when the input can't be parsed.
    """
    if not value or value.lower() == "today":
        return today_iso()

    try:
        if len(value) == 10 and value[4] == "-" and value[7] == "-":
            return IsoDate(pd.to_datetime(value, format="%Y-%m-%d").strftime("%Y-%m-%d"))
        return IsoDate(pd.to_datetime(value, dayfirst=True).strftime("%Y-%m-%d"))
    except (ValueError, TypeError) as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: today, YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)


def warn_if_unsaved(store: LedgerStore) -> None:
    if not store.last_save_ok:
        console.print("[yellow]Warning: change applied but could not be saved to disk[/yellow]")
