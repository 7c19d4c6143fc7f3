"""Maintenance items and the fixed catalogue of service categories."""

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ridecalc.domain.errors import ValidationError
from ridecalc.domain.models import IsoDate, Km, Money
from ridecalc.domain.records import parse_flag


class MaintenanceGroup(Enum):
    """Display groups for maintenance categories."""

    OIL = "oil"
    AIR = "air"
    GENERAL = "general"


class MaintenanceType(Enum):
    """Closed set of service categories a driver can track."""

    OIL_CHANGE = "oil_change"
    OIL_FILTER = "oil_filter"
    AIR_FILTER = "air_filter"
    CABIN_FILTER = "cabin_filter"
    FUEL_FILTER = "fuel_filter"
    BRAKE_PADS = "brake_pads"
    TIRES = "tires"
    ALIGNMENT = "alignment"
    GENERAL = "general"

    @property
    def group(self) -> MaintenanceGroup:
        return _GROUPS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "MaintenanceType":
        """Look up a type by value, case-insensitively.

        Raises:
            ValidationError: If the value is not a known category.
        """
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            choices = ", ".join(t.value for t in cls)
            raise ValidationError(f"Unknown maintenance type '{value}'. Choose one of: {choices}") from e


_GROUPS = {
    MaintenanceType.OIL_CHANGE: MaintenanceGroup.OIL,
    MaintenanceType.OIL_FILTER: MaintenanceGroup.OIL,
    MaintenanceType.AIR_FILTER: MaintenanceGroup.AIR,
    MaintenanceType.CABIN_FILTER: MaintenanceGroup.AIR,
    MaintenanceType.FUEL_FILTER: MaintenanceGroup.AIR,
    MaintenanceType.BRAKE_PADS: MaintenanceGroup.GENERAL,
    MaintenanceType.TIRES: MaintenanceGroup.GENERAL,
    MaintenanceType.ALIGNMENT: MaintenanceGroup.GENERAL,
    MaintenanceType.GENERAL: MaintenanceGroup.GENERAL,
}

_LABELS = {
    MaintenanceType.OIL_CHANGE: "Oil change",
    MaintenanceType.OIL_FILTER: "Oil filter",
    MaintenanceType.AIR_FILTER: "Air filter",
    MaintenanceType.CABIN_FILTER: "Cabin filter",
    MaintenanceType.FUEL_FILTER: "Fuel filter",
    MaintenanceType.BRAKE_PADS: "Brake pads",
    MaintenanceType.TIRES: "Tires",
    MaintenanceType.ALIGNMENT: "Alignment / balancing",
    MaintenanceType.GENERAL: "General service",
}


def new_maintenance_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class MaintenanceItem:
    """A serviceable part or task tracked by odometer interval."""

    id: str
    type: MaintenanceType
    date: IsoDate
    km: Km
    next_km: Km
    cost: Money = Money(0.0)
    is_completed: bool = False

    def completed(self) -> "MaintenanceItem":
        return replace(self, is_completed=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "date": self.date,
            "km": self.km,
            "nextKm": self.next_km,
            "cost": self.cost,
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MaintenanceItem":
        """Build an item from a persisted dict.

        Unknown categories load as ``general``. The ``next_km > km`` rule is
        not re-checked here; it only applies when an item is created.

        Raises:
            ValidationError: If the id is missing or a number is malformed.
        """
        item_id = data.get("id")
        if item_id is None or item_id == "":
            raise ValidationError("maintenance item has no id")

        try:
            kind = MaintenanceType(data.get("type"))
        except ValueError:
            kind = MaintenanceType.GENERAL

        try:
            km = float(data.get("km") or 0)
            next_km = float(data.get("nextKm") or 0)
            cost = float(data.get("cost") or 0)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"maintenance item {item_id} has a malformed number") from e

        return cls(
            id=str(item_id),
            type=kind,
            date=IsoDate(str(data.get("date") or "")),
            km=Km(km),
            next_km=Km(next_km),
            cost=Money(cost),
            is_completed=parse_flag(data.get("isCompleted", False)),
        )


def validate_maintenance_interval(km: float, next_km: float) -> tuple[bool, str | None]:
    """Validate that the next service threshold lies beyond the current reading.

    Args:
        km: Odometer at the last service.
        next_km: Odometer at which the next service is due.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if next_km <= km:
        return False, f"Next service km ({next_km:,.0f}) must be greater than current km ({km:,.0f})"
    return True, None


def create_maintenance_item(
    kind: MaintenanceType,
    date: IsoDate,
    km: float,
    next_km: float,
    cost: float = 0.0,
) -> MaintenanceItem:
    """Create a new pending maintenance item with a fresh id.

    Raises:
        ValidationError: If next_km is not greater than km, or cost is negative.
    """
    valid, error = validate_maintenance_interval(km, next_km)
    if not valid:
        raise ValidationError(error)
    if cost < 0:
        raise ValidationError("Cost must not be negative")

    return MaintenanceItem(
        id=new_maintenance_id(),
        type=kind,
        date=date,
        km=Km(km),
        next_km=Km(next_km),
        cost=Money(cost),
    )
