"""Prize catalog management for the admin panel."""

from __future__ import annotations

from typing import Any, Dict, List

from core import SEED_PRIZES, get_logger
from core.exceptions import NotFoundError, ValidationError
from database.models import Prize
from database.repositories import PrizeRepository
from utils.validators import clean_text, validate_weight

logger = get_logger(__name__)


class PrizeCatalog:
    """CRUD over prizes with payload validation."""

    async def list_prizes(self) -> List[Prize]:
        return await PrizeRepository.list_all()

    async def create(self, payload: Dict[str, Any]) -> Prize:
        name = clean_text(payload.get("name"))
        weight = payload.get("weight", 0)
        image = clean_text(payload.get("image", "")) or ""
        if not name or not validate_weight(weight):
            raise ValidationError()

        prize = await PrizeRepository.create(name=name, image=image, weight=weight)
        logger.info("Prize created: %s (%s) weight=%s", prize.name, prize.id, prize.weight)
        return prize

    async def update(self, prize_id: str, payload: Dict[str, Any]) -> Prize:
        """Partial update; only correctly typed fields are applied."""
        changes: Dict[str, Any] = {}

        name = clean_text(payload.get("name"))
        if name is not None:
            if not name:
                raise ValidationError()
            changes["name"] = name

        image = clean_text(payload.get("image"))
        if image is not None:
            changes["image"] = image

        weight = payload.get("weight")
        if isinstance(weight, (int, float)) and not isinstance(weight, bool):
            if not validate_weight(weight):
                raise ValidationError()
            changes["weight"] = weight

        prize = await PrizeRepository.update(prize_id, changes)
        if prize is None:
            raise NotFoundError()
        logger.info("Prize updated: %s fields=%s", prize_id, sorted(changes))
        return prize

    async def delete(self, prize_id: str) -> None:
        if not await PrizeRepository.delete(prize_id):
            raise NotFoundError()
        logger.info("Prize deleted: %s", prize_id)

    async def seed_if_empty(self) -> bool:
        """Load the sample catalog when no prize exists yet."""
        if await PrizeRepository.count():
            return False
        await PrizeRepository.insert_many(SEED_PRIZES)
        logger.info("Loaded %d sample prizes", len(SEED_PRIZES))
        return True
