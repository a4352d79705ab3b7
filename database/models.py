"""Data access layer models implemented with handcrafted queries."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union


def to_iso(millis: Optional[int]) -> Optional[str]:
    """Render epoch milliseconds as an ISO-8601 UTC string."""
    if millis is None:
        return None
    moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _number(value: float) -> Union[int, float]:
    return int(value) if float(value).is_integer() else float(value)


@dataclass(slots=True)
class BusinessConfig:
    business_name: str
    instagram_qr_url: str
    exempt_dnis: tuple[str, ...]
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    @classmethod
    def from_row(cls, row: Any) -> "BusinessConfig":
        return cls(
            business_name=row["business_name"],
            instagram_qr_url=row["instagram_qr_url"],
            exempt_dnis=tuple(json.loads(row["exempt_dnis"] or "[]")),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "businessName": self.business_name,
            "instagramQrUrl": self.instagram_qr_url,
            "exemptDnis": list(self.exempt_dnis),
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }


@dataclass(slots=True)
class Prize:
    id: str
    name: str
    image: str
    weight: float
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    @classmethod
    def from_row(cls, row: Any) -> "Prize":
        return cls(
            id=row["id"],
            name=row["name"],
            image=row["image"] or "",
            weight=row["weight"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "weight": _number(self.weight),
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }


@dataclass(slots=True)
class SpinRecord:
    dni: str
    last_spin_at: int
    next_available_at: int
    last_prize_id: Optional[str]
    last_prize_name: str
    last_prize_image: str

    @classmethod
    def from_row(cls, row: Any) -> "SpinRecord":
        return cls(
            dni=row["dni"],
            last_spin_at=row["last_spin_at"],
            next_available_at=row["next_available_at"],
            last_prize_id=row["last_prize_id"],
            last_prize_name=row["last_prize_name"],
            last_prize_image=row["last_prize_image"] or "",
        )
