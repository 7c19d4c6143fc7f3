"""Maintenance commands (list, add, complete, delete)."""

import sys

import typer
from rich.table import Table

from ridecalc.commands.common import console, get_settings, normalize_date, open_store, warn_if_unsaved
from ridecalc.domain.errors import ValidationError
from ridecalc.domain.maintenance import MaintenanceItem, MaintenanceType, create_maintenance_item
from ridecalc.domain.monitor import BudgetState, MaintenanceStatus, Tier, Urgency, evaluate_maintenance
from ridecalc.formatting import format_date, format_km, format_money
from ridecalc.store import LedgerStore

TIER_STYLES = {Tier.SUCCESS: "green", Tier.WARNING: "yellow", Tier.DANGER: "red"}


def resolve_item(store: LedgerStore, id_prefix: str) -> MaintenanceItem | None:
    """Find an item by id or unique id prefix, printing why when none matches."""
    matches = [m for m in store.maintenance() if m.id.startswith(id_prefix)]
    if not matches:
        console.print(f"[yellow]No maintenance item matches '{id_prefix}'[/yellow]")
        return None
    if len(matches) > 1:
        console.print(f"[yellow]'{id_prefix}' matches {len(matches)} items, use a longer id[/yellow]")
        return None
    return matches[0]


def format_progress(fraction: float, tier: Tier, width: int = 10) -> str:
    filled = int(round(fraction * width))
    style = TIER_STYLES[tier]
    return f"[{style}]{'█' * filled}{'░' * (width - filled)} {fraction * 100:.0f}%[/{style}]"


def format_urgency(status: MaintenanceStatus) -> str:
    remaining = format_km(abs(status.km_remaining))
    if status.urgency is Urgency.OVERDUE:
        return f"[red]OVERDUE {remaining}[/red]"
    if status.urgency is Urgency.UPCOMING:
        return f"[yellow]Due in {remaining}[/yellow]"
    return f"[green]{remaining} left[/green]"


def format_budget(status: MaintenanceStatus, reserve: float, settings: dict) -> str:
    cost = status.item.cost
    if status.budget_state is BudgetState.NO_COST:
        return "[dim]No cost[/dim]"
    if status.budget_state is BudgetState.GOAL_REACHED:
        return f"Covered ({format_money(cost, settings)})"
    return f"{format_money(max(reserve, 0.0), settings)} of {format_money(cost, settings)}"


def list_command() -> None:
    """Show pending maintenance with urgency and reserve coverage, then completed items."""
    settings = get_settings()
    store = open_store()
    overview = evaluate_maintenance(store.ledger)

    console.print(f"[bold cyan]Vehicle odometer:[/bold cyan] {format_km(overview.current_km, settings)}")
    console.print(f"[bold cyan]Reserve:[/bold cyan] {format_money(overview.reserve, settings)}\n")

    if overview.warnings:
        for warning in overview.warnings:
            console.print(f"[bold red]![/bold red] {warning}")
        console.print()

    if not overview.pending and not overview.completed:
        console.print("[dim]No maintenance tracked yet (use 'ridecalc maint add')[/dim]")
        return

    for group, statuses in overview.by_group().items():
        if not statuses:
            continue
        table = Table(title=f"{group.value.title()} maintenance")
        table.add_column("ID", style="dim")
        table.add_column("Service", style="white")
        table.add_column("Status")
        table.add_column("KM progress")
        table.add_column("Driven", justify="right")
        table.add_column("Reserve vs cost")
        table.add_column("Coverage")

        for status in statuses:
            table.add_row(
                status.item.id[:8],
                status.item.type.label,
                format_urgency(status),
                format_progress(status.km_progress, status.km_tier),
                f"{format_km(status.km_driven, settings)} / {format_km(status.km_interval, settings)}",
                format_budget(status, overview.reserve, settings),
                format_progress(status.budget_progress, status.budget_tier),
            )
        console.print(table)

    if overview.completed:
        table = Table(title="Completed")
        table.add_column("ID", style="dim")
        table.add_column("Service", style="white")
        table.add_column("Date", style="cyan")
        table.add_column("KM", justify="right")
        table.add_column("Paid", justify="right")
        for item in overview.completed:
            table.add_row(
                item.id[:8],
                item.type.label,
                format_date(item.date) if item.date else "-",
                format_km(item.km, settings),
                f"[green]{format_money(item.cost, settings)}[/green]",
            )
        console.print(table)


def add_command(kind: str, km: float | None, next_km: float, cost: float = 0.0, date: str | None = None) -> None:
    """Track a new maintenance item.

    Args:
        kind: Maintenance type value (e.g. "oil_change").
        km: Odometer at service; defaults to the vehicle odometer.
        next_km: Odometer at which the next service is due.
        cost: Estimated cost.
        date: Service date; defaults to today.
    """
    settings = get_settings()
    iso_date = normalize_date(date)
    store = open_store()
    service_km = store.config.total_vehicle_km if km is None else km

    try:
        item = create_maintenance_item(MaintenanceType.parse(kind), iso_date, service_km, next_km, cost)
        store.add_maintenance(item)
    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] {item.type.label} saved (ID: {item.id[:8]})")
    console.print(f"  Next service at {format_km(item.next_km, settings)}")
    if item.cost:
        console.print(f"  Estimated cost: {format_money(item.cost, settings)}")
    warn_if_unsaved(store)


def complete_command(id_prefix: str, yes: bool = False) -> None:
    """Mark a maintenance item as done, debiting its cost from the reserve."""
    settings = get_settings()
    store = open_store()
    item = resolve_item(store, id_prefix)
    if item is None:
        return

    if item.is_completed:
        console.print(f"[yellow]{item.type.label} is already completed[/yellow]")
        return

    prompt = f"{format_money(item.cost, settings)} will be permanently debited from the reserve. Continue?"
    if not yes and not typer.confirm(prompt, default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    store.complete_maintenance(item.id)
    console.print(f"[green]✓[/green] {item.type.label} completed")
    warn_if_unsaved(store)


def delete_command(id_prefix: str, yes: bool = False) -> None:
    """Remove a maintenance item, pending or completed."""
    store = open_store()
    item = resolve_item(store, id_prefix)
    if item is None:
        return

    if not yes and not typer.confirm(f"Delete {item.type.label} ({item.id[:8]})?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    store.delete_maintenance(item.id)
    console.print(f"[green]✓[/green] Deleted {item.type.label}")
    warn_if_unsaved(store)
