"""Spin engine: cooldown state machine plus weighted prize draw."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from core import MS_PER_HOUR, SpinDefaults, SpinState, get_logger
from core.exceptions import CatalogEmptyError, NotFoundError, RateLimitError, ValidationError
from database.models import Prize, SpinRecord
from database.repositories import PrizeRepository, SpinRepository
from services.business_config import BusinessConfigService
from services.selection import pick_weighted
from utils.clock import now_ms
from utils.validators import validate_dni

logger = get_logger(__name__)


@dataclass(frozen=True)
class SpinResult:
    prize: Prize
    redirect: str
    next_available_at: int

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": True, "prize": self.prize.to_dict(), "redirect": self.redirect}


def classify(record: Optional[SpinRecord], exempt: bool, now: int) -> SpinState:
    """Eligibility of a DNI at ``now`` (epoch ms)."""
    if record is None:
        return SpinState.NEVER_SPUN
    if not exempt and record.next_available_at > now:
        return SpinState.COOLING_DOWN
    return SpinState.ELIGIBLE


class SpinEngine:
    """Decides whether a DNI may spin, draws a prize and stores the outcome.

    There is no lock between reading the spin record and writing it back: two
    simultaneous spins for the same DNI can both pass the cooldown check and
    the later write wins.
    """

    def __init__(
        self,
        config_service: BusinessConfigService,
        cooldown_hours: int = SpinDefaults.COOLDOWN_HOURS,
        clock: Callable[[], int] = now_ms,
        rand: Callable[[], float] = random.random,
    ) -> None:
        self.config_service = config_service
        self.cooldown_hours = cooldown_hours
        self.clock = clock
        self.rand = rand

    @property
    def cooldown_ms(self) -> int:
        return self.cooldown_hours * MS_PER_HOUR

    async def state(self, dni: str) -> SpinState:
        config = await self.config_service.get_or_create()
        record = await SpinRepository.get(dni)
        return classify(record, dni in config.exempt_dnis, self.clock())

    async def spin(self, dni: Any) -> SpinResult:
        """Run one spin for ``dni``.

        Raises:
            ValidationError: ``dni`` is not exactly eight digits
            RateLimitError: the DNI is cooling down
            CatalogEmptyError: no prizes are configured
        """
        if not validate_dni(dni):
            raise ValidationError("DNI debe tener 8 dígitos")

        config = await self.config_service.get_or_create()
        exempt = dni in config.exempt_dnis
        now = self.clock()
        record = await SpinRepository.get(dni)

        if classify(record, exempt, now) is SpinState.COOLING_DOWN:
            retry_in_ms = record.next_available_at - now
            logger.info("Spin rejected for DNI %s: %d ms of cooldown left", dni, retry_in_ms)
            raise RateLimitError(retry_in_ms)

        prizes = await PrizeRepository.list_all()
        if not prizes:
            raise CatalogEmptyError()

        prize = pick_weighted(prizes, self.rand)
        next_available_at = now if exempt else now + self.cooldown_ms

        await SpinRepository.upsert(SpinRecord(
            dni=dni,
            last_spin_at=now,
            next_available_at=next_available_at,
            last_prize_id=prize.id,
            last_prize_name=prize.name,
            last_prize_image=prize.image or "",
        ))
        logger.info("DNI %s won %r%s", dni, prize.name, " (exempt)" if exempt else "")

        return SpinResult(
            prize=prize,
            redirect=SpinDefaults.RESULT_PATH.format(dni=dni),
            next_available_at=next_available_at,
        )

    async def last_prize(self, dni: Any) -> Dict[str, Any]:
        """Business display info plus the prize snapshot of the latest spin."""
        if not validate_dni(dni):
            raise ValidationError("DNI inválido")

        record = await SpinRepository.get(dni)
        if record is None:
            raise NotFoundError("Sin registro de premio para este DNI")
        config = await self.config_service.get_or_create()

        return {
            "businessName": config.business_name or self.config_service.defaults.business_name,
            "instagramQrUrl": config.instagram_qr_url or "",
            "dni": dni,
            "prizeName": record.last_prize_name,
            "prizeImage": record.last_prize_image or "",
        }
