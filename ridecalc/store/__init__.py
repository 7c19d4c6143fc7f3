"""Persistence for the ledger: sqlite location and schema, the JSON blob, and LedgerStore."""

from ridecalc.store.ledger_store import (
    LedgerStore,
    MemoryPersistence,
    Persistence,
    SqlitePersistence,
    load_ledger,
)
from ridecalc.store.queries import load_ledger_payload, save_ledger_payload
from ridecalc.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "load_ledger_payload",
    "save_ledger_payload",
    # Ledger store
    "LedgerStore",
    "MemoryPersistence",
    "Persistence",
    "SqlitePersistence",
    "load_ledger",
]
