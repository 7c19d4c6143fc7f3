"""History and report commands for viewing aggregated entries."""

from typing import Any

from rich.table import Table

from ridecalc.commands.common import console, get_settings, open_store
from ridecalc.domain.reserve import committed_savings, maintenance_spent, pending_savings, reserve_balance
from ridecalc.domain.report import PeriodReport, daily_view, monthly_view, overall_view, weekly_view
from ridecalc.formatting import format_date, format_km, format_money, format_percent

NO_DATA = {
    "daily": "No entries yet",
    "weekly": "No entries to group by week",
    "monthly": "No entries to group by month",
    "overall": "No data to analyse yet",
}


def colored_money(value: float, settings: dict[str, Any]) -> str:
    """Money in green when non-negative, red otherwise."""
    style = "green" if value >= 0 else "red"
    return f"[{style}]{format_money(value, settings)}[/{style}]"


def format_shares(uber: float, n99: float, other: float) -> str:
    return f"Uber {format_percent(uber)} · 99 {format_percent(n99)} · Other {format_percent(other)}"


def render_period_table(title: str, reports: list[PeriodReport], settings: dict[str, Any], show_km_avg: bool) -> None:
    table = Table(title=title)
    table.add_column("Period", style="cyan")
    table.add_column("Days", justify="right", style="dim")
    table.add_column("KM", justify="right")
    table.add_column("Income", justify="right")
    table.add_column("Expenses", justify="right")
    table.add_column("Profit", justify="right")
    table.add_column("Profit/km", justify="right")
    table.add_column("Margin", justify="right")
    table.add_column("Avg/day", justify="right")
    if show_km_avg:
        table.add_column("KM/day", justify="right")
    table.add_column("Income split", style="dim")

    for report in reports:
        row = [
            report.label,
            str(report.days),
            format_km(report.km, settings),
            format_money(report.total_income, settings),
            format_money(report.total_expenses, settings),
            colored_money(report.profit, settings),
            format_money(report.profit_per_km, settings),
            format_percent(report.margin),
            format_money(report.avg_profit_per_day, settings),
        ]
        if show_km_avg:
            row.append(format_km(report.avg_km_per_day, settings))
        row.append(format_shares(report.uber_share, report.n99_share, report.other_share))
        table.add_row(*row)

    console.print(table)


def daily_history() -> None:
    """Show every entry, newest first."""
    settings = get_settings()
    reports = daily_view(open_store().records())

    if not reports:
        console.print(f"[dim]{NO_DATA['daily']}[/dim]")
        return

    table = Table(title=f"Daily entries ({len(reports)})")
    table.add_column("Date", style="cyan")
    table.add_column("KM", justify="right")
    table.add_column("Income", justify="right")
    table.add_column("Expenses", justify="right")
    table.add_column("Profit", justify="right")
    table.add_column("Profit/km", justify="right")
    table.add_column("Margin", justify="right")
    table.add_column("Income split", style="dim")
    table.add_column("Reserve", justify="center")

    for report in reports:
        record = report.record
        if record.saved_to_reserve is False:
            reserve_mark = "○"
        else:
            reserve_mark = "✓"
        table.add_row(
            format_date(record.date),
            format_km(record.km, settings),
            format_money(record.total_income, settings),
            format_money(record.total_expenses, settings),
            colored_money(record.profit, settings),
            format_money(report.profit_per_km, settings),
            format_percent(report.margin),
            format_shares(report.uber_share, report.n99_share, report.other_share),
            reserve_mark,
        )

    console.print(table)


def weekly_history() -> None:
    """Show ISO-week totals, newest first."""
    reports = weekly_view(open_store().records())
    if not reports:
        console.print(f"[dim]{NO_DATA['weekly']}[/dim]")
        return
    render_period_table("Weekly report", reports, get_settings(), show_km_avg=False)


def monthly_history() -> None:
    """Show monthly totals, newest first."""
    reports = monthly_view(open_store().records())
    if not reports:
        console.print(f"[dim]{NO_DATA['monthly']}[/dim]")
        return
    render_period_table("Monthly report", reports, get_settings(), show_km_avg=True)


def overall_history() -> None:
    """Show the all-time summary."""
    settings = get_settings()
    report = overall_view(open_store().records())

    if report is None:
        console.print(f"[dim]{NO_DATA['overall']}[/dim]")
        return

    console.print("[bold cyan]All-time profit[/bold cyan]")
    console.print(f"  {colored_money(report.profit, settings)}\n")
    console.print(f"  Period: {format_date(report.start or '')} - {format_date(report.end or '')} ({report.days} days)")
    console.print(f"  KM driven: {format_km(report.km, settings)}")
    console.print(f"  Income: {format_money(report.total_income, settings)}")
    console.print(f"  Expenses: {format_money(report.total_expenses, settings)}")
    console.print(f"  Profit per km: {format_money(report.profit_per_km, settings)}")
    console.print(f"  Margin: {format_percent(report.margin)}")
    console.print(f"  Average per day: {format_money(report.avg_profit_per_day, settings)}")
    console.print(f"  Average km per day: {format_km(report.avg_km_per_day, settings)}")
    console.print(f"  Income split: {format_shares(report.uber_share, report.n99_share, report.other_share)}")


def reserve_command() -> None:
    """Show how the virtual reserve balance is made up."""
    settings = get_settings()
    ledger = open_store().ledger
    balance = reserve_balance(ledger)

    console.print("[bold cyan]Virtual reserve[/bold cyan]\n")
    console.print(f"  Savings rate: {ledger.config.savings_percentage:g}% of daily profit")
    console.print(f"  Set aside: {format_money(committed_savings(ledger), settings)}")
    console.print(f"  Spent on maintenance: -{format_money(maintenance_spent(ledger), settings)}")
    console.print(f"\n  [bold]Balance:[/bold] {colored_money(balance, settings)}")

    pending = pending_savings(ledger)
    if pending > 0:
        console.print(f"\n[yellow]{format_money(pending, settings)} still waiting to be set aside[/yellow]")
