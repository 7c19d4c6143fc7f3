"""Admin commands for init, backup, configuration and export."""

import shutil
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from rich.table import Table

from ridecalc.commands.common import console, get_settings, open_store, warn_if_unsaved
from ridecalc.config import create_default_config, get_config_path
from ridecalc.domain.errors import NothingToExportError, ValidationError
from ridecalc.export import export_records
from ridecalc.formatting import format_km
from ridecalc.store.schema import get_db_path, init_database

DEFAULT_BACKUP_DIR = Path.home() / ".ridecalc" / "backups"


def backup_command(output_dir: str | None = None) -> None:
    """Copy the database (and the config file, if any) into a timestamped backup."""
    db_path = get_db_path()
    if not db_path.exists():
        console.print("[red]No database to back up. Run 'ridecalc init' or add an entry first.[/red]", style="bold")
        sys.exit(1)

    backup_dir = Path(output_dir).expanduser() if output_dir else DEFAULT_BACKUP_DIR
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    copies = [(db_path, backup_dir / f"ridecalc_{stamp}.db")]
    config_path = get_config_path()
    if config_path.exists():
        copies.append((config_path, backup_dir / f"config_{stamp}.toml"))

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)
        for source, target in copies:
            shutil.copy2(source, target)
            console.print(f"[green]✓[/green] {source.name} -> {target}")
    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"\n[green]Backup written to {backup_dir}[/green]")


def init_command(force: bool = False) -> None:
    """Create the database and the settings file."""
    db_path = get_db_path()
    config_path = get_config_path()
    existing = [path for path in (db_path, config_path) if path.exists()]

    if existing and not force:
        console.print("[red]Already initialised:[/red]", style="bold")
        for path in existing:
            console.print(f"  {path}")
        console.print("\n[yellow]Use 'ridecalc init --force' to start over[/yellow]")
        sys.exit(1)

    try:
        if force and db_path.exists():
            db_path.unlink()
        init_database(db_path)
        console.print(f"[green]✓[/green] Database ready at {db_path}")
        create_default_config(config_path)
        console.print(f"[green]✓[/green] Settings written to {config_path} (permissions: 600)")
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def config_show_command() -> None:
    """Show ledger settings and display preferences."""
    settings = get_settings()
    config = open_store().config

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Savings percentage", f"{config.savings_percentage:g}%")
    table.add_row("Vehicle odometer", format_km(config.total_vehicle_km, settings))
    table.add_row("Alert distance", format_km(config.alert_km, settings))
    table.add_row("Theme", config.theme)
    table.add_row("Currency symbol", settings["currency_symbol"])
    table.add_row("Database", str(get_db_path()))
    table.add_row("Config file", str(get_config_path()))
    console.print(table)


def config_set_command(
    savings_percentage: float | None = None,
    total_km: float | None = None,
    alert_km: float | None = None,
    theme: str | None = None,
) -> None:
    """Update ledger settings; only the given values change."""
    changes = {
        name: value
        for name, value in (
            ("savings_percentage", savings_percentage),
            ("total_vehicle_km", total_km),
            ("alert_km", alert_km),
            ("theme", theme),
        )
        if value is not None
    }
    if not changes:
        console.print("[yellow]Nothing to change (see 'ridecalc config set --help')[/yellow]")
        return

    store = open_store()
    try:
        store.update_config(**changes)
    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    console.print("[green]✓[/green] Configuration saved")
    warn_if_unsaved(store)


def export_command(output: str | None = None) -> None:
    """Export every daily entry to CSV."""
    path = Path(output).expanduser() if output else Path.cwd() / "ridecalc_backup.csv"

    try:
        count = export_records(open_store().records(), path)
    except NothingToExportError:
        console.print("[yellow]Nothing to export[/yellow]")
        return
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {count} entries to {path}")
