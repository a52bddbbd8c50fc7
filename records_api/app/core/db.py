"""
SQLite database integration and simple migration system.

This module provides the store abstraction used by every service
(``RecordStore``), its SQLite implementation (``SqliteStore``), the
migration runner applied on application start (``init_db``) and a
FastAPI dependency returning the store attached to the application.

Services never open connections themselves: they receive a store and
issue parameterized statements through its ``get``, ``all`` and
``run`` methods.  ``SqliteStore`` opens a fresh connection for every
statement and executes it in a worker thread, so a slow disk never
blocks the event loop.
"""

import asyncio
import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Protocol, Sequence

from fastapi import Request

from .config import settings
from .errors import StoreError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class RunResult(NamedTuple):
    """Outcome of a write statement."""

    changes: int
    last_row_id: Optional[int]


class RecordStore(Protocol):
    """Contract for the persistent store consumed by the services.

    Every method raises ``StoreError`` when the underlying database
    fails.
    """

    async def get(self, sql: str, params: Sequence[Any] = ()) -> Optional[Row]: ...

    async def all(self, sql: str, params: Sequence[Any] = ()) -> List[Row]: ...

    async def run(self, sql: str, params: Sequence[Any] = ()) -> RunResult: ...


def get_database_path(db_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured path is absolute, use it directly.  Otherwise
    resolve it relative to the project root.
    """
    db_url = db_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  No type detection is enabled; dates are stored and returned
    as the strings the client sent.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor, commits and closes the connection."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


class SqliteStore:
    """``RecordStore`` backed by a SQLite file."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    def _get(self, sql: str, params: Sequence[Any]) -> Optional[Row]:
        with get_cursor(self.db_path) as cursor:
            row = cursor.execute(sql, tuple(params)).fetchone()
            return dict(row) if row is not None else None

    def _all(self, sql: str, params: Sequence[Any]) -> List[Row]:
        with get_cursor(self.db_path) as cursor:
            return [dict(row) for row in cursor.execute(sql, tuple(params)).fetchall()]

    def _run(self, sql: str, params: Sequence[Any]) -> RunResult:
        with get_cursor(self.db_path) as cursor:
            cursor.execute(sql, tuple(params))
            return RunResult(changes=cursor.rowcount, last_row_id=cursor.lastrowid)

    async def _call(self, operation: str, func, sql: str, params: Sequence[Any]):
        try:
            return await asyncio.to_thread(func, sql, params)
        except (sqlite3.Error, UnicodeEncodeError) as exc:
            logger.debug("SQLite %s failed: %s [sql=%s]", operation, exc, " ".join(sql.split()))
            raise StoreError(operation=operation) from exc

    async def get(self, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
        return await self._call("get", self._get, sql, params)

    async def all(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        return await self._call("all", self._all, sql, params)

    async def run(self, sql: str, params: Sequence[Any] = ()) -> RunResult:
        return await self._call("run", self._run, sql, params)


MIGRATIONS: List[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS customers (
            id INTEGER PRIMARY KEY,
            legal_name TEXT,
            registration_date TEXT,
            tax_id TEXT,
            full_name TEXT,
            address TEXT,
            neighborhood TEXT,
            postal_code TEXT,
            city TEXT,
            region TEXT,
            phone TEXT
        );

        CREATE TABLE IF NOT EXISTS products (
            id INTEGER PRIMARY KEY,
            item TEXT,
            code TEXT,
            quantity INTEGER,
            serial_number TEXT,
            entry_date TEXT,
            exit_date TEXT,
            description TEXT
        );

        CREATE TABLE IF NOT EXISTS accounts (
            id INTEGER PRIMARY KEY,
            username TEXT UNIQUE,
            password_hash TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: lookup indexes for the search endpoints
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_customers_tax_id ON customers(tax_id);
        CREATE INDEX IF NOT EXISTS idx_products_code ON products(code);
        """,
    ),
]


def init_db(db_path: Optional[str] = None) -> None:
    """Create the database file and apply pending migrations.

    Applied versions are recorded in the ``migrations`` table; only
    versions above the current maximum are executed.  To change the
    schema, append a new entry to ``MIGRATIONS`` with an incremented
    version number.
    """
    db_path = db_path or get_database_path()
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s to %s", version, db_path)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version


def get_store(request: Request) -> RecordStore:
    """FastAPI dependency returning the store attached to the application."""
    return request.app.state.store
