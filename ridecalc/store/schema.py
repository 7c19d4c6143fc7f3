"""Database location and schema.

The ledger is persisted as a single JSON document, so the schema is one
key/value table.
"""

import os
import sqlite3
from pathlib import Path

from ridecalc.config import load_settings

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
)
"""


def get_xdg_data_home() -> Path:
    """XDG_DATA_HOME, or ~/.local/share when unset."""
    configured = os.environ.get("XDG_DATA_HOME")
    return Path(configured) if configured else Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Resolve the database file.

    RIDECALC_DB wins over the ``db_path`` setting, which wins over the XDG
    default.
    """
    override = os.environ.get("RIDECALC_DB")
    if override:
        return Path(override).expanduser()

    configured = load_settings().get("db_path")
    if configured:
        return Path(configured).expanduser()

    return get_xdg_data_home() / "ridecalc" / "ridecalc.db"


def database_exists(db_path: Path | None = None) -> bool:
    return (db_path or get_db_path()).exists()


def init_database(db_path: Path | None = None) -> None:
    """Create the database file and the kv table if missing.

    Raises:
        sqlite3.Error: If the schema can't be created.
    """
    path = db_path or get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(path)
    try:
        conn.execute(SCHEMA)
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
