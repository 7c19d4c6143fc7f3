"""Pure functions for maintenance urgency and reserve affordability.

Each pending item is compared against the vehicle odometer for urgency and
against the current reserve balance for affordability. Every pending item is
checked against the whole reserve, so the same money can appear to cover
several items at once.
"""

from dataclasses import dataclass, field
from enum import Enum

from ridecalc.domain.ledger import Ledger
from ridecalc.domain.maintenance import MaintenanceGroup, MaintenanceItem
from ridecalc.domain.models import Km, Money
from ridecalc.domain.reserve import reserve_balance


class Urgency(Enum):
    """Urgency tiers. Lower value = more urgent."""

    OVERDUE = 1
    UPCOMING = 2
    OK = 3


class Tier(Enum):
    """Colour tier for progress bars."""

    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


class BudgetState(Enum):
    NO_COST = "no_cost"
    SAVING = "saving"
    GOAL_REACHED = "goal_reached"


@dataclass(frozen=True)
class MaintenanceStatus:
    """Calculated status for one pending maintenance item."""

    item: MaintenanceItem
    urgency: Urgency
    km_remaining: Km
    km_driven: Km
    km_interval: Km
    km_progress: float
    km_tier: Tier
    budget_progress: float
    budget_tier: Tier
    budget_state: BudgetState

    @property
    def is_due(self) -> bool:
        return self.urgency in (Urgency.OVERDUE, Urgency.UPCOMING)


@dataclass(frozen=True)
class MaintenanceOverview:
    """Everything the maintenance view needs in one snapshot."""

    current_km: Km
    reserve: Money
    pending: list[MaintenanceStatus] = field(default_factory=list)
    completed: list[MaintenanceItem] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def has_alert(self) -> bool:
        return any(s.is_due for s in self.pending)

    def by_group(self) -> dict[MaintenanceGroup, list[MaintenanceStatus]]:
        groups: dict[MaintenanceGroup, list[MaintenanceStatus]] = {g: [] for g in MaintenanceGroup}
        for status in self.pending:
            groups[status.item.type.group].append(status)
        return groups


def check_urgency(km_remaining: float, alert_km: float) -> Urgency:
    """Determine urgency from the distance left to the next service."""
    if km_remaining <= 0:
        return Urgency.OVERDUE
    if km_remaining <= alert_km:
        return Urgency.UPCOMING
    return Urgency.OK


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def calculate_km_progress(current_km: float, last_km: float, next_km: float) -> float:
    """Fraction of the service interval already driven, clamped to [0, 1].

    An empty or inverted interval counts as fully due.
    """
    interval = next_km - last_km
    if interval <= 0:
        return 1.0
    return clamp((current_km - last_km) / interval)


def km_progress_tier(progress: float) -> Tier:
    if progress >= 0.9:
        return Tier.DANGER
    if progress >= 0.7:
        return Tier.WARNING
    return Tier.SUCCESS


def calculate_budget_progress(reserve: float, cost: float) -> tuple[float, Tier, BudgetState]:
    """Compare the reserve against an item's cost.

    Args:
        reserve: Current reserve balance (may be negative).
        cost: Estimated cost of the item.

    Returns:
        Tuple of (fraction covered in [0, 1], colour tier, budget state).
    """
    if cost <= 0:
        return 1.0, Tier.SUCCESS, BudgetState.NO_COST

    fraction = clamp(reserve / cost) if reserve > 0 else 0.0

    if reserve < cost * 0.5:
        return fraction, Tier.DANGER, BudgetState.SAVING
    if reserve < cost:
        return fraction, Tier.WARNING, BudgetState.SAVING
    return fraction, Tier.SUCCESS, BudgetState.GOAL_REACHED


def evaluate_item(item: MaintenanceItem, current_km: float, alert_km: float, reserve: float) -> MaintenanceStatus:
    """Compute the full status of a single pending item."""
    km_remaining = item.next_km - current_km
    progress = calculate_km_progress(current_km, item.km, item.next_km)
    budget_progress, budget_tier, budget_state = calculate_budget_progress(reserve, item.cost)

    return MaintenanceStatus(
        item=item,
        urgency=check_urgency(km_remaining, alert_km),
        km_remaining=Km(km_remaining),
        km_driven=Km(max(0.0, current_km - item.km)),
        km_interval=Km(item.next_km - item.km),
        km_progress=progress,
        km_tier=km_progress_tier(progress),
        budget_progress=budget_progress,
        budget_tier=budget_tier,
        budget_state=budget_state,
    )


def format_warning(status: MaintenanceStatus) -> str | None:
    """Human-readable alert line for a due item, or None when it is OK."""
    label = status.item.type.label
    if status.urgency is Urgency.OVERDUE:
        return f"{label} overdue by {abs(status.km_remaining):,.0f} km"
    if status.urgency is Urgency.UPCOMING:
        return f"{label} due in {status.km_remaining:,.0f} km"
    return None


def evaluate_maintenance(ledger: Ledger) -> MaintenanceOverview:
    """Evaluate every maintenance item against the odometer and reserve.

    Args:
        ledger: Current ledger.

    Returns:
        MaintenanceOverview with pending statuses in ledger order, completed
        items, and warning lines for overdue/upcoming services.
    """
    current_km = ledger.config.total_vehicle_km
    reserve = reserve_balance(ledger)

    pending = [
        evaluate_item(item, current_km, ledger.config.alert_km, reserve)
        for item in ledger.maintenance
        if not item.is_completed
    ]
    completed = [item for item in ledger.maintenance if item.is_completed]
    warnings = [w for w in (format_warning(s) for s in pending) if w]

    return MaintenanceOverview(
        current_km=Km(current_km),
        reserve=reserve,
        pending=pending,
        completed=completed,
        warnings=warnings,
    )
