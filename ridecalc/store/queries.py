"""Reads and writes against the kv table.

The ledger is stored as one JSON document under LEDGER_KEY.
"""

import json
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any

from ridecalc.store.schema import get_db_path

LEDGER_KEY = "ledger"


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path or get_db_path())
    conn.row_factory = sqlite3.Row
    return conn


def get_value(key: str, db_path: Path | None = None) -> str | None:
    """Stored text for ``key``, or None if it was never written.

    Raises:
        sqlite3.Error: On any database failure.
    """
    with closing(_connect(db_path)) as conn:
        row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
    return row["value"] if row else None


def set_value(key: str, value: str, db_path: Path | None = None) -> None:
    """Upsert ``value`` under ``key``, stamping updated_at.

    Raises:
        sqlite3.Error: On any database failure; the transaction is rolled back.
    """
    with closing(_connect(db_path)) as conn:
        try:
            conn.execute(
                """
                INSERT INTO kv (key, value, updated_at) VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def load_ledger_payload(db_path: Path | None = None) -> dict[str, Any] | None:
    """Decode the saved ledger.

    Returns:
        The payload, or None before the first save.

    Raises:
        sqlite3.Error: On any database failure.
        json.JSONDecodeError: When the stored document is corrupt.
    """
    raw = get_value(LEDGER_KEY, db_path)
    return None if raw is None else json.loads(raw)


def save_ledger_payload(payload: dict[str, Any], db_path: Path | None = None) -> None:
    set_value(LEDGER_KEY, json.dumps(payload, ensure_ascii=False), db_path)
