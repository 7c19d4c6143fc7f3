"""Daily entry commands (add, today, save-reserve, delete)."""

import sys

import typer

from ridecalc.commands.common import console, get_settings, normalize_date, open_store, warn_if_unsaved
from ridecalc.dates import today_iso
from ridecalc.domain.errors import ValidationError
from ridecalc.domain.models import IsoDate, Km, Money
from ridecalc.domain.records import DailyRecord
from ridecalc.domain.reserve import reserve_balance
from ridecalc.formatting import format_date, format_km, format_money


def add_command(
    date: str | None,
    km: float = 0.0,
    uber: float = 0.0,
    n99: float = 0.0,
    other_income: float = 0.0,
    fuel: float = 0.0,
    other_expense: float = 0.0,
) -> None:
    """Save the entry for a day, replacing any existing entry for that date.

    Args:
        date: Entry date ("today", YYYY-MM-DD, DD/MM/YYYY, ...).
        km: Distance driven that day.
        uber: Uber income.
        n99: 99 income.
        other_income: Other income (tips, other apps).
        fuel: Fuel spend.
        other_expense: Any other expense.
    """
    settings = get_settings()
    iso_date = normalize_date(date)

    try:
        record = DailyRecord(
            date=iso_date,
            km=Km(km),
            uber=Money(uber),
            n99=Money(n99),
            other_income=Money(other_income),
            fuel=Money(fuel),
            other_expense=Money(other_expense),
        )
    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    store = open_store()
    existed = store.get_record(iso_date) is not None
    store.upsert_record(record)

    verb = "updated" if existed else "saved"
    console.print(f"[green]✓[/green] Entry for {format_date(iso_date)} {verb}:")
    console.print(f"  KM: {format_km(record.km, settings)}")
    console.print(f"  Income: {format_money(record.total_income, settings)}")
    console.print(f"  Expenses: {format_money(record.total_expenses, settings)}")
    console.print(f"  Profit: {format_money(record.profit, settings)}")
    if existed:
        console.print("[dim]Savings for this day need to be confirmed again (use 'ridecalc save-reserve')[/dim]")
    warn_if_unsaved(store)


def today_command() -> None:
    """Show today's entry and its savings slice."""
    settings = get_settings()
    store = open_store()
    ledger = store.ledger
    today = today_iso()
    record = ledger.records.get(today)

    console.print(f"[bold cyan]Today, {format_date(today)}[/bold cyan]\n")

    if record is None:
        console.print("[dim]No entry for today yet (use 'ridecalc add today ...')[/dim]")
    else:
        profit_style = "green" if record.profit >= 0 else "red"
        console.print(f"  KM: {format_km(record.km, settings)}")
        console.print(f"  Income: {format_money(record.total_income, settings)}")
        console.print(f"  Expenses: {format_money(record.total_expenses, settings)}")
        console.print(f"  Profit: [{profit_style}]{format_money(record.profit, settings)}[/{profit_style}]")

        pct = ledger.config.savings_percentage
        savings = record.savings_amount(pct)
        if savings > 0:
            if record.saved_to_reserve:
                console.print(f"\n[green]✓[/green] {format_money(savings, settings)} already set aside for the reserve")
            else:
                console.print(
                    f"\n[yellow]Set aside {format_money(savings, settings)} ({pct:g}% of profit)[/yellow]"
                    " - run 'ridecalc save-reserve' once done"
                )

    balance = reserve_balance(ledger)
    style = "cyan" if balance >= 0 else "red"
    console.print(f"\n[bold]Reserve:[/bold] [{style}]{format_money(balance, settings)}[/{style}]")


def save_reserve_command(date: str | None = None) -> None:
    """Confirm that a day's savings slice went into the reserve."""
    settings = get_settings()
    iso_date = normalize_date(date)
    store = open_store()

    if not store.mark_record_saved(iso_date):
        console.print(f"[yellow]No entry for {format_date(iso_date)}[/yellow]")
        return

    record = store.get_record(IsoDate(iso_date))
    amount = record.savings_amount(store.config.savings_percentage) if record else 0.0
    console.print(f"[green]✓[/green] {format_money(amount, settings)} added to the virtual reserve")
    console.print(f"[dim]Reserve: {format_money(reserve_balance(store.ledger), settings)}[/dim]")
    warn_if_unsaved(store)


def delete_command(date: str, yes: bool = False) -> None:
    """Delete the entry for a day."""
    iso_date = normalize_date(date)
    store = open_store()

    if store.get_record(iso_date) is None:
        console.print(f"[yellow]No entry for {format_date(iso_date)}[/yellow]")
        return

    if not yes and not typer.confirm(f"Delete the entry for {format_date(iso_date)}?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    store.delete_record(iso_date)
    console.print(f"[green]✓[/green] Deleted entry for {format_date(iso_date)}")
    warn_if_unsaved(store)
