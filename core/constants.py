"""Application-wide constants and configuration values."""

from __future__ import annotations

from enum import Enum


MS_PER_HOUR = 3_600_000


class SessionDefaults:
    """Admin session cookie settings."""
    COOKIE_NAME = "admin_token"
    TTL_HOURS = 72
    SAMESITE = "Lax"


class SpinDefaults:
    """Spin engine configuration."""
    COOLDOWN_HOURS = 24
    DNI_LENGTH = 8
    RESULT_PATH = "/premio/{dni}"


class BusinessDefaults:
    """Values for the configuration singleton created on first boot."""
    BUSINESS_NAME = "Tu Negocio"
    INSTAGRAM_QR_URL = ""
    EXEMPT_DNIS = ("45035781",)


# Sample catalog inserted when the prize table is empty
SEED_PRIZES: tuple[dict, ...] = (
    {"name": "10% de descuento", "image": "", "weight": 30},
    {"name": "2x1 en remeras", "image": "", "weight": 10},
    {"name": "Sticker gratis", "image": "", "weight": 25},
    {"name": "Gorra de regalo", "image": "", "weight": 5},
    {"name": "Sigue participando", "image": "", "weight": 30},
)


class SpinState(str, Enum):
    """Per-DNI eligibility state."""
    NEVER_SPUN = "never_spun"
    COOLING_DOWN = "cooling_down"
    ELIGIBLE = "eligible"

    @property
    def can_spin(self) -> bool:
        return self is not SpinState.COOLING_DOWN
