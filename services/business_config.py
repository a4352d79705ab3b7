"""Business settings shown on the result page and the cooldown exemption list."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict

from core import get_logger
from core.exceptions import ValidationError
from database.models import BusinessConfig
from database.repositories import BusinessConfigRepository
from utils.validators import clean_text, validate_dni

logger = get_logger(__name__)


class BusinessConfigService:
    """Reads and updates the configuration singleton.

    ``defaults`` seeds the row the first time it is needed.
    """

    def __init__(self, defaults: BusinessConfig) -> None:
        self.defaults = defaults

    async def get_or_create(self) -> BusinessConfig:
        config = await BusinessConfigRepository.get()
        if config is None:
            config = await BusinessConfigRepository.create_if_missing(self.defaults)
            logger.info("Config created with exempt DNIs: %s", list(config.exempt_dnis))
        return config

    async def update(self, payload: Dict[str, Any]) -> BusinessConfig:
        """Apply the string fields present in ``payload``; other types are ignored."""
        config = await self.get_or_create()
        changes: Dict[str, Any] = {}

        business_name = clean_text(payload.get("businessName"))
        if business_name is not None:
            changes["business_name"] = business_name

        instagram_qr_url = clean_text(payload.get("instagramQrUrl"))
        if instagram_qr_url is not None:
            changes["instagram_qr_url"] = instagram_qr_url

        if "exemptDnis" in payload:
            changes["exempt_dnis"] = self._parse_exempt_dnis(payload["exemptDnis"])

        updated = await BusinessConfigRepository.save(replace(config, **changes))
        logger.info("Config updated: %s", sorted(changes))
        return updated

    @staticmethod
    def _parse_exempt_dnis(value: Any) -> tuple[str, ...]:
        if not isinstance(value, list):
            raise ValidationError("exemptDnis debe ser una lista de DNIs")
        dnis = []
        for item in value:
            dni = clean_text(item)
            if dni is None or not validate_dni(dni):
                raise ValidationError(f"DNI exento inválido: {item!r}")
            if dni not in dnis:
                dnis.append(dni)
        return tuple(dnis)
