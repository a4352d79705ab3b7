"""Application configuration module.

Reads settings from environment variables with defaults suitable for a
single-instance promotional deployment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    """Get integer from environment variable with fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str(name: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.getenv(name, default)


def _parse_str_list(value: str) -> tuple[str, ...]:
    """Parse comma-separated strings, dropping blanks."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Config:
    admin_code: str
    admin_session_secret: str
    secret_key: str
    admin_session_ttl_hours: int
    cooldown_hours: int
    exempt_dnis: tuple[str, ...]
    business_name: str
    instagram_qr_url: str
    environment: str
    debug: bool
    web_host: str
    web_port: int
    database_path: str
    log_folder: str
    log_level: str
    seed_prizes: bool

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def load_config() -> Config:
    """Load application configuration from environment variables.

    Returns:
        Config: Application configuration with validated values
    """
    return Config(
        admin_code=_get_str("ADMIN_CODE", "123456"),
        admin_session_secret=_get_str("ADMIN_SESSION_SECRET", "change-me"),
        secret_key=_get_str("SECRET_KEY", "flask-secret-change-me"),
        admin_session_ttl_hours=_get_int("ADMIN_SESSION_TTL_HOURS", 72),
        cooldown_hours=_get_int("COOLDOWN_HOURS", 24),
        exempt_dnis=_parse_str_list(_get_str("EXEMPT_DNIS", "45035781")),
        business_name=_get_str("NEGOCIO_NOMBRE", "Tu Negocio"),
        instagram_qr_url=_get_str("INSTAGRAM_QR_URL", ""),
        environment=_get_str("ENVIRONMENT", "development"),
        debug=_get_bool("DEBUG", False),
        web_host=_get_str("WEB_HOST", "0.0.0.0"),
        web_port=_get_int("WEB_PORT", 3000),
        database_path=_get_str("DATABASE_PATH", "data/prizewheel.sqlite"),
        log_folder=_get_str("LOG_FOLDER", "logs"),
        log_level=_get_str("LOG_LEVEL", "INFO").upper(),
        seed_prizes=_get_bool("SEED_PRIZES", True),
    )
