"""The ledger store: sole owner and mutator of the driver's ledger.

Every mutation is applied to a copy of the ledger, swapped in once it has
succeeded, and then the whole ledger is written back through the
persistence backend. Validation failures leave the ledger untouched. A failed
write is logged and reported to the caller, but the in-memory change stands.
"""

import copy
import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Protocol

from ridecalc.domain.errors import ValidationError
from ridecalc.domain.ledger import Ledger, LedgerConfig, validate_config_change
from ridecalc.domain.maintenance import MaintenanceItem, validate_maintenance_interval
from ridecalc.domain.models import IsoDate
from ridecalc.domain.records import DailyRecord
from ridecalc.store.queries import load_ledger_payload, save_ledger_payload
from ridecalc.store.schema import database_exists, init_database

logger = logging.getLogger(__name__)


class Persistence(Protocol):
    """Load/save boundary for the serialised ledger."""

    def load(self) -> dict[str, Any] | None: ...

    def save(self, payload: dict[str, Any]) -> bool: ...


class SqlitePersistence:
    """Keeps the ledger payload as a JSON document in the sqlite kv table."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path

    def load(self) -> dict[str, Any] | None:
        if not database_exists(self.db_path):
            return None
        return load_ledger_payload(self.db_path)

    def save(self, payload: dict[str, Any]) -> bool:
        try:
            init_database(self.db_path)
            save_ledger_payload(payload, self.db_path)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not save ledger: %s", e)
            return False
        return True


class MemoryPersistence:
    """In-process backend, used by tests and dry runs."""

    def __init__(self, payload: dict[str, Any] | None = None) -> None:
        self.payload = payload
        self.saves = 0

    def load(self) -> dict[str, Any] | None:
        return copy.deepcopy(self.payload)

    def save(self, payload: dict[str, Any]) -> bool:
        # Round-trip through JSON so tests see exactly what a real backend would store
        self.payload = json.loads(json.dumps(payload))
        self.saves += 1
        return True


def load_ledger(persistence: Persistence) -> Ledger:
    """Load the ledger, falling back to an empty one on any read problem."""
    try:
        payload = persistence.load()
    except (sqlite3.Error, OSError, ValueError) as e:
        logger.warning("Stored ledger unreadable, starting empty: %s", e)
        return Ledger()

    if payload is None:
        logger.debug("No stored ledger, starting empty")
        return Ledger()

    ledger = Ledger.from_payload(payload)
    logger.debug("Loaded %d records and %d maintenance items", len(ledger.records), len(ledger.maintenance))
    return ledger


class LedgerStore:
    """Owns one Ledger and exposes the only operations allowed to change it."""

    def __init__(self, persistence: Persistence) -> None:
        self._persistence = persistence
        self.last_save_ok = True
        self._ledger = load_ledger(persistence)

    @property
    def ledger(self) -> Ledger:
        """A detached copy of the current ledger."""
        return copy.deepcopy(self._ledger)

    @property
    def config(self) -> LedgerConfig:
        return copy.copy(self._ledger.config)

    def records(self) -> list[DailyRecord]:
        return sorted(self._ledger.records.values(), key=lambda r: r.date)

    def get_record(self, date: IsoDate) -> DailyRecord | None:
        return self._ledger.records.get(date)

    def maintenance(self) -> list[MaintenanceItem]:
        return list(self._ledger.maintenance)

    def get_maintenance(self, item_id: str) -> MaintenanceItem | None:
        return next((m for m in self._ledger.maintenance if m.id == item_id), None)

    def _commit(self, ledger: Ledger) -> None:
        self._ledger = ledger
        self.last_save_ok = self._persistence.save(ledger.to_payload())
        if not self.last_save_ok:
            logger.warning("Ledger change kept in memory but not persisted")

    def upsert_record(self, record: DailyRecord) -> None:
        """Insert or replace the record for its date.

        The stored copy always has ``saved_to_reserve`` reset to False. The
        odometer only advances by the distance this save adds for the date.

        Args:
            record: Record to store.
        """
        ledger = copy.deepcopy(self._ledger)
        previous = ledger.records.get(record.date)
        ledger.records[record.date] = record.with_saved(False)

        added_km = record.km - (previous.km if previous else 0.0)
        if added_km > 0:
            ledger.config.total_vehicle_km += added_km

        logger.info("%s record for %s", "Updated" if previous else "Added", record.date)
        self._commit(ledger)

    def delete_record(self, date: IsoDate) -> bool:
        """Remove the record for a date. Returns False if there was none."""
        if date not in self._ledger.records:
            logger.debug("No record for %s to delete", date)
            return False

        ledger = copy.deepcopy(self._ledger)
        del ledger.records[date]
        logger.info("Deleted record for %s", date)
        self._commit(ledger)
        return True

    def mark_record_saved(self, date: IsoDate) -> bool:
        """Commit a day's savings slice to the reserve. Returns False if there was no record."""
        record = self._ledger.records.get(date)
        if record is None:
            logger.debug("No record for %s to mark as saved", date)
            return False

        ledger = copy.deepcopy(self._ledger)
        ledger.records[date] = record.with_saved(True)
        logger.info("Marked savings for %s as committed", date)
        self._commit(ledger)
        return True

    def add_maintenance(self, item: MaintenanceItem) -> None:
        """Append a maintenance item and raise the odometer to its km if higher.

        Raises:
            ValidationError: If ``next_km`` is not greater than ``km``.
        """
        valid, error = validate_maintenance_interval(item.km, item.next_km)
        if not valid:
            raise ValidationError(error)

        ledger = copy.deepcopy(self._ledger)
        ledger.maintenance.append(item)
        if item.km > ledger.config.total_vehicle_km:
            ledger.config.total_vehicle_km = item.km

        logger.info("Added %s maintenance %s", item.type.value, item.id)
        self._commit(ledger)

    def delete_maintenance(self, item_id: str) -> bool:
        """Remove a maintenance item in any state. Returns False if the id is unknown."""
        if self.get_maintenance(item_id) is None:
            logger.debug("No maintenance item %s to delete", item_id)
            return False

        ledger = copy.deepcopy(self._ledger)
        ledger.maintenance = [m for m in ledger.maintenance if m.id != item_id]
        logger.info("Deleted maintenance %s", item_id)
        self._commit(ledger)
        return True

    def complete_maintenance(self, item_id: str) -> bool:
        """Mark a pending item completed.

        Returns:
            True if the item moved to completed, False if it was unknown or
            already completed.
        """
        item = self.get_maintenance(item_id)
        if item is None or item.is_completed:
            logger.debug("Maintenance %s not pending, nothing to complete", item_id)
            return False

        ledger = copy.deepcopy(self._ledger)
        ledger.maintenance = [m.completed() if m.id == item_id else m for m in ledger.maintenance]
        logger.info("Completed maintenance %s (cost %.2f)", item_id, item.cost)
        self._commit(ledger)
        return True

    def update_config(self, **changes: Any) -> None:
        """Merge validated fields into the config.

        Raises:
            ValidationError: If any field is unknown or its value invalid.
        """
        for name, value in changes.items():
            valid, error = validate_config_change(name, value)
            if not valid:
                raise ValidationError(error)

        ledger = copy.deepcopy(self._ledger)
        for name, value in changes.items():
            setattr(ledger.config, name, value if name == "theme" else float(value))

        logger.info("Updated config: %s", ", ".join(sorted(changes)))
        self._commit(ledger)
