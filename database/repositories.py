"""Database access layer helpers."""

from __future__ import annotations

import json
import uuid
from typing import Any, Dict, Iterable, List, Optional

from database.base_repository import BaseRepository
from database.models import BusinessConfig, Prize, SpinRecord
from utils.clock import now_ms


class BusinessConfigRepository(BaseRepository):
    """Repository for the configuration singleton (row id 1)."""

    @staticmethod
    async def get() -> Optional[BusinessConfig]:
        row = await BaseRepository.fetch_one("SELECT * FROM business_config WHERE id=1")
        return BusinessConfig.from_row(row) if row else None

    @staticmethod
    async def create_if_missing(defaults: BusinessConfig) -> BusinessConfig:
        """Insert the singleton unless it already exists and return the stored row."""
        stamp = now_ms()
        await BaseRepository.execute(
            """
            INSERT INTO business_config
                (id, business_name, instagram_qr_url, exempt_dnis, created_at, updated_at)
            VALUES (1, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO NOTHING
            """,
            (
                defaults.business_name,
                defaults.instagram_qr_url,
                json.dumps(list(defaults.exempt_dnis)),
                stamp,
                stamp,
            ),
        )
        return await BusinessConfigRepository.get()

    @staticmethod
    async def save(config: BusinessConfig) -> BusinessConfig:
        """Upsert every field of the singleton."""
        stamp = now_ms()
        await BaseRepository.execute(
            """
            INSERT INTO business_config
                (id, business_name, instagram_qr_url, exempt_dnis, created_at, updated_at)
            VALUES (1, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                business_name=excluded.business_name,
                instagram_qr_url=excluded.instagram_qr_url,
                exempt_dnis=excluded.exempt_dnis,
                updated_at=excluded.updated_at
            """,
            (
                config.business_name,
                config.instagram_qr_url,
                json.dumps(list(config.exempt_dnis)),
                config.created_at or stamp,
                stamp,
            ),
        )
        return await BusinessConfigRepository.get()


class PrizeRepository(BaseRepository):
    """Repository for the prize catalog."""

    @staticmethod
    async def list_all() -> List[Prize]:
        """All prizes in creation order."""
        rows = await BaseRepository.fetch_all("SELECT * FROM prizes ORDER BY seq")
        return [Prize.from_row(row) for row in rows]

    @staticmethod
    async def get(prize_id: str) -> Optional[Prize]:
        row = await BaseRepository.fetch_one("SELECT * FROM prizes WHERE id=?", (prize_id,))
        return Prize.from_row(row) if row else None

    @staticmethod
    async def count() -> int:
        return await BaseRepository.fetch_value("SELECT COUNT(*) FROM prizes") or 0

    @staticmethod
    async def create(name: str, image: str, weight: float) -> Prize:
        prize_id = uuid.uuid4().hex
        stamp = now_ms()
        await BaseRepository.execute(
            """
            INSERT INTO prizes (id, name, image, weight, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (prize_id, name, image, weight, stamp, stamp),
        )
        return await PrizeRepository.get(prize_id)

    @staticmethod
    async def insert_many(prizes: Iterable[Dict[str, Any]]) -> None:
        stamp = now_ms()
        await BaseRepository.execute_many(
            """
            INSERT INTO prizes (id, name, image, weight, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            [
                (uuid.uuid4().hex, prize["name"], prize.get("image", ""), prize["weight"], stamp, stamp)
                for prize in prizes
            ],
        )

    @staticmethod
    async def update(prize_id: str, changes: Dict[str, Any]) -> Optional[Prize]:
        """Apply ``changes`` (subset of name/image/weight); None when the prize is absent."""
        allowed = {key: changes[key] for key in ("name", "image", "weight") if key in changes}
        assignments = [f"{column}=?" for column in allowed]
        assignments.append("updated_at=?")
        params = [*allowed.values(), now_ms(), prize_id]

        updated = await BaseRepository.execute(
            f"UPDATE prizes SET {', '.join(assignments)} WHERE id=?",
            params,
        )
        if not updated:
            return None
        return await PrizeRepository.get(prize_id)

    @staticmethod
    async def delete(prize_id: str) -> bool:
        deleted = await BaseRepository.execute("DELETE FROM prizes WHERE id=?", (prize_id,))
        return deleted > 0


class SpinRepository(BaseRepository):
    """Repository for per-DNI spin records."""

    @staticmethod
    async def get(dni: str) -> Optional[SpinRecord]:
        row = await BaseRepository.fetch_one("SELECT * FROM spins WHERE dni=?", (dni,))
        return SpinRecord.from_row(row) if row else None

    @staticmethod
    async def upsert(record: SpinRecord) -> None:
        """Create the record or overwrite every spin field; concurrent writers: last one wins."""
        stamp = now_ms()
        await BaseRepository.execute(
            """
            INSERT INTO spins (
                dni, last_spin_at, next_available_at,
                last_prize_id, last_prize_name, last_prize_image,
                created_at, updated_at
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(dni) DO UPDATE SET
                last_spin_at=excluded.last_spin_at,
                next_available_at=excluded.next_available_at,
                last_prize_id=excluded.last_prize_id,
                last_prize_name=excluded.last_prize_name,
                last_prize_image=excluded.last_prize_image,
                updated_at=excluded.updated_at
            """,
            (
                record.dni,
                record.last_spin_at,
                record.next_available_at,
                record.last_prize_id,
                record.last_prize_name,
                record.last_prize_image,
                stamp,
                stamp,
            ),
        )
