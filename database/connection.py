"""SQLite connection factory for the prize wheel store."""

from __future__ import annotations

import sqlite3
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite

from core.exceptions import StoreError
from core.logger import get_logger

logger = get_logger(__name__)


class SQLiteDatabase:
    """Opens short-lived aiosqlite connections against a single database file.

    Flask views drive coroutines on a fresh event loop per request, so
    connections are never shared between requests.
    """

    def __init__(self, database_path: str, busy_timeout_ms: int = 5000) -> None:
        self.database_path = Path(database_path)
        self.busy_timeout_ms = busy_timeout_ms

    def ensure_directory(self) -> None:
        if not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)

    async def _apply_pragma(self, conn: aiosqlite.Connection) -> None:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute("PRAGMA temp_store=MEMORY")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout_ms}")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield an open connection; store failures surface as StoreError."""
        try:
            conn = await aiosqlite.connect(self.database_path.as_posix())
        except sqlite3.Error as exc:
            logger.error("Cannot open database %s: %s", self.database_path, exc)
            raise StoreError() from exc

        try:
            conn.row_factory = aiosqlite.Row
            await self._apply_pragma(conn)
            yield conn
        except sqlite3.Error as exc:
            logger.error("Database operation failed: %s", exc)
            raise StoreError() from exc
        finally:
            await conn.close()


_database: Optional[SQLiteDatabase] = None


def get_database() -> SQLiteDatabase:
    if _database is None:
        raise RuntimeError("Database not initialized")
    return _database


def init_database(database_path: str, busy_timeout_ms: int = 5000) -> SQLiteDatabase:
    global _database
    database = SQLiteDatabase(database_path=database_path, busy_timeout_ms=busy_timeout_ms)
    database.ensure_directory()
    _database = database
    return database
