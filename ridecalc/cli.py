"""CLI entry point for ridecalc."""

import typer

from ridecalc.commands import admin, entries, history, maintenance
from ridecalc.config import load_settings
from ridecalc.logs import setup_logging

app = typer.Typer(
    name="ridecalc",
    help="Daily earnings, reports and maintenance reserve for rideshare drivers",
    add_completion=False,
)
history_app = typer.Typer(help="Show your daily, weekly, monthly and overall reports.")
maint_app = typer.Typer(help="Track maintenance against your odometer and reserve.")
config_app = typer.Typer(help="Show or change your settings.")

app.add_typer(history_app, name="history")
app.add_typer(maint_app, name="maint")
app.add_typer(config_app, name="config")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Daily earnings, reports and maintenance reserve for rideshare drivers."""
    setup_logging("DEBUG" if verbose else load_settings().get("log_level", "WARNING"))


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize ridecalc database and configuration."""
    admin.init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.ridecalc/backups)"),
) -> None:
    """Backup your database and configuration files."""
    admin.backup_command(output_dir)


@app.command()
def add(
    date: str = typer.Argument("today", help="Day of the entry (today, YYYY-MM-DD, DD/MM/YYYY)"),
    km: float = typer.Option(0.0, "--km", help="Kilometres driven"),
    uber: float = typer.Option(0.0, "--uber", help="Uber income"),
    n99: float = typer.Option(0.0, "--n99", help="99 income"),
    other_income: float = typer.Option(0.0, "--other-income", help="Other income"),
    fuel: float = typer.Option(0.0, "--fuel", help="Fuel spend"),
    other_expense: float = typer.Option(0.0, "--other-expense", help="Other expenses"),
) -> None:
    """Save a day's entry (replaces any entry for the same day)."""
    entries.add_command(date, km, uber, n99, other_income, fuel, other_expense)


@app.command()
def today() -> None:
    """Show today's entry, savings slice and reserve."""
    entries.today_command()


@app.command(name="save-reserve")
def save_reserve(
    date: str = typer.Argument("today", help="Day whose savings you set aside"),
) -> None:
    """Confirm you set a day's savings aside into the reserve."""
    entries.save_reserve_command(date)


@app.command()
def delete(
    date: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a day's entry."""
    entries.delete_command(date, yes)


@app.command()
def reserve() -> None:
    """Show your virtual reserve balance."""
    history.reserve_command()


@app.command()
def export(
    output: str = typer.Option(None, "--output", "-o", help="CSV file (default: ./ridecalc_backup.csv)"),
) -> None:
    """Export your daily entries to CSV."""
    admin.export_command(output)


@history_app.command(name="daily")
def history_daily() -> None:
    """Every entry, newest first."""
    history.daily_history()


@history_app.command(name="weekly")
def history_weekly() -> None:
    """Totals per ISO week."""
    history.weekly_history()


@history_app.command(name="monthly")
def history_monthly() -> None:
    """Totals per month."""
    history.monthly_history()


@history_app.command(name="overall")
def history_overall() -> None:
    """All-time summary."""
    history.overall_history()


@maint_app.command(name="list")
def maint_list() -> None:
    """Show pending and completed maintenance."""
    maintenance.list_command()


@maint_app.command(name="add")
def maint_add(
    kind: str = typer.Argument(..., help="Service type (oil_change, tires, brake_pads, ...)"),
    next_km: float = typer.Option(..., "--next-km", help="Odometer at which the next service is due"),
    km: float = typer.Option(None, "--km", help="Odometer at service (default: current odometer)"),
    cost: float = typer.Option(0.0, "--cost", help="Estimated cost"),
    date: str = typer.Option(None, "--date", help="Service date (default: today)"),
) -> None:
    """Track a new maintenance item."""
    maintenance.add_command(kind, km, next_km, cost, date)


@maint_app.command(name="complete")
def maint_complete(
    item_id: str = typer.Argument(..., help="Item ID (or unique prefix)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Mark maintenance as paid; its cost is debited from the reserve."""
    maintenance.complete_command(item_id, yes)


@maint_app.command(name="delete")
def maint_delete(
    item_id: str = typer.Argument(..., help="Item ID (or unique prefix)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a maintenance item."""
    maintenance.delete_command(item_id, yes)


@config_app.command(name="show")
def config_show() -> None:
    """Show your settings."""
    admin.config_show_command()


@config_app.command(name="set")
def config_set(
    savings_percentage: float = typer.Option(None, "--savings-percentage", help="Share of profit to save (0-100)"),
    total_km: float = typer.Option(None, "--total-km", help="Vehicle odometer"),
    alert_km: float = typer.Option(None, "--alert-km", help="Warn when a service is this close"),
    theme: str = typer.Option(None, "--theme", help="light or dark"),
) -> None:
    """Change your settings."""
    admin.config_set_command(savings_percentage, total_km, alert_km, theme)


if __name__ == "__main__":
    app()
