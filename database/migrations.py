"""Database schema migrations."""

from __future__ import annotations

from typing import Iterable

from core.logger import get_logger
from database.connection import get_database

logger = get_logger(__name__)


SCHEMA_SQL: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS business_config (
        id INTEGER PRIMARY KEY CHECK (id = 1),
        business_name TEXT NOT NULL,
        instagram_qr_url TEXT NOT NULL DEFAULT '',
        exempt_dnis TEXT NOT NULL DEFAULT '[]',
        created_at INTEGER NOT NULL,
        updated_at INTEGER NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS prizes (
        seq INTEGER PRIMARY KEY AUTOINCREMENT,
        id TEXT UNIQUE NOT NULL,
        name TEXT NOT NULL,
        image TEXT NOT NULL DEFAULT '',
        weight REAL NOT NULL CHECK (weight >= 0),
        created_at INTEGER NOT NULL,
        updated_at INTEGER NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS spins (
        dni TEXT PRIMARY KEY CHECK (length(dni) = 8),
        last_spin_at INTEGER NOT NULL,
        next_available_at INTEGER NOT NULL,
        last_prize_id TEXT,
        last_prize_name TEXT NOT NULL,
        last_prize_image TEXT NOT NULL DEFAULT '',
        created_at INTEGER NOT NULL,
        updated_at INTEGER NOT NULL
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_spins_next_available ON spins(next_available_at);",
)


async def run_migrations(statements: Iterable[str] = SCHEMA_SQL) -> None:
    """Create tables and indexes if they do not exist yet."""
    database = get_database()
    async with database.connection() as conn:
        for statement in statements:
            await conn.execute(statement)
        await conn.commit()
    logger.info("Database schema ready at %s", database.database_path)
