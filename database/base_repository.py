"""Base repository pattern for database operations."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import aiosqlite

from database.connection import get_database


class BaseRepository:
    """Base repository with common database operations."""

    @staticmethod
    async def execute(query: str, params: Sequence[Any] = ()) -> int:
        """Execute a write query and return the number of affected rows."""
        async with get_database().connection() as conn:
            cursor = await conn.execute(query, params)
            await conn.commit()
            return cursor.rowcount

    @staticmethod
    async def execute_many(query: str, params: Sequence[Sequence[Any]]) -> None:
        """Execute a query multiple times with different parameters."""
        async with get_database().connection() as conn:
            await conn.executemany(query, params)
            await conn.commit()

    @staticmethod
    async def fetch_one(query: str, params: Sequence[Any] = ()) -> Optional[aiosqlite.Row]:
        """Fetch a single row."""
        async with get_database().connection() as conn:
            cursor = await conn.execute(query, params)
            return await cursor.fetchone()

    @staticmethod
    async def fetch_all(query: str, params: Sequence[Any] = ()) -> List[aiosqlite.Row]:
        """Fetch all rows."""
        async with get_database().connection() as conn:
            cursor = await conn.execute(query, params)
            return list(await cursor.fetchall())

    @staticmethod
    async def fetch_value(query: str, params: Sequence[Any] = ()) -> Optional[Any]:
        """Fetch a single value from a single row."""
        row = await BaseRepository.fetch_one(query, params)
        return row[0] if row else None
