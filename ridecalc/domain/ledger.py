"""The ledger aggregate and its payload (de)serialisation.

A payload is the JSON-shaped dict persisted by the store:

    {"records": [...], "maintenance": [...],
     "config": {"savingsPercentage", "totalVehicleKm", "theme", "alertKm"}}

Loading is forgiving: missing keys fall back to defaults and entries that
cannot be parsed are skipped rather than failing the whole load.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any

from ridecalc.domain.errors import ValidationError
from ridecalc.domain.maintenance import MaintenanceItem
from ridecalc.domain.models import IsoDate
from ridecalc.domain.records import DailyRecord

logger = logging.getLogger(__name__)

THEMES = ("light", "dark")

# Payload key for each LedgerConfig field
_CONFIG_KEYS = {
    "savings_percentage": "savingsPercentage",
    "total_vehicle_km": "totalVehicleKm",
    "alert_km": "alertKm",
    "theme": "theme",
}


@dataclass
class LedgerConfig:
    """Process-wide settings stored alongside the ledger."""

    savings_percentage: float = 10.0
    total_vehicle_km: float = 0.0
    alert_km: float = 500.0
    theme: str = "light"

    def to_dict(self) -> dict[str, Any]:
        return {_CONFIG_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "LedgerConfig":
        config = cls()
        if not isinstance(data, dict):
            return config

        for name, key in _CONFIG_KEYS.items():
            if key not in data or data[key] is None:
                continue
            value = data[key]
            if name == "theme":
                if value in THEMES:
                    config.theme = value
                continue
            try:
                setattr(config, name, float(value))
            except (TypeError, ValueError):
                logger.warning("Ignoring malformed config value %s=%r", key, value)

        return config


def validate_config_change(name: str, value: Any) -> tuple[bool, str | None]:
    """Validate a single config field update.

    Args:
        name: LedgerConfig field name.
        value: Proposed value.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in _CONFIG_KEYS:
        return False, f"Unknown config field '{name}'"

    if name == "theme":
        if value not in THEMES:
            return False, f"Theme must be one of: {', '.join(THEMES)}"
        return True, None

    try:
        number = float(value)
    except (TypeError, ValueError):
        return False, f"{name} must be a number"

    if name == "savings_percentage" and not 0 <= number <= 100:
        return False, "Savings percentage must be between 0 and 100"
    if number < 0:
        return False, f"{name} must not be negative"

    return True, None


def _entries(payload: dict[str, Any], key: str) -> list[Any]:
    """The list stored under key; anything else is logged and read as empty."""
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning("Ignoring %s: expected a list, got %s", key, type(value).__name__)
        return []
    return value


@dataclass
class Ledger:
    """All driver state: daily records keyed by date, maintenance and config."""

    records: dict[IsoDate, DailyRecord] = field(default_factory=dict)
    maintenance: list[MaintenanceItem] = field(default_factory=list)
    config: LedgerConfig = field(default_factory=LedgerConfig)

    def to_payload(self) -> dict[str, Any]:
        return {
            "records": [r.to_dict() for r in self.records.values()],
            "maintenance": [m.to_dict() for m in self.maintenance],
            "config": self.config.to_dict(),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> "Ledger":
        """Rebuild a ledger from a persisted payload.

        Args:
            payload: Decoded payload, or None when nothing was stored.

        Returns:
            Ledger with defaults for anything missing or unreadable.
        """
        if not isinstance(payload, dict):
            return cls()

        records: dict[IsoDate, DailyRecord] = {}
        for raw in _entries(payload, "records"):
            try:
                record = DailyRecord.from_dict(raw)
            except (ValidationError, AttributeError) as e:
                logger.warning("Skipping unreadable record %r: %s", raw, e)
                continue
            # Last occurrence wins for duplicate dates
            records[record.date] = record

        maintenance: list[MaintenanceItem] = []
        for raw in _entries(payload, "maintenance"):
            try:
                maintenance.append(MaintenanceItem.from_dict(raw))
            except (ValidationError, AttributeError) as e:
                logger.warning("Skipping unreadable maintenance item %r: %s", raw, e)

        return cls(
            records=records,
            maintenance=maintenance,
            config=LedgerConfig.from_dict(payload.get("config")),
        )
