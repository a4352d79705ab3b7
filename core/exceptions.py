"""Application-wide exception classes.

Every error carries the HTTP status it maps to and a message that is safe to
show to the caller. Internal details stay in the logs.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ApplicationError(Exception):
    """Base exception for all application errors."""

    status_code = 500
    default_message = "Error interno del servidor"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""
    pass


class DatabaseError(ApplicationError):
    """Base exception for database-related errors."""
    pass


class StoreError(DatabaseError):
    """Raised when the backing store is unreachable or a write fails."""
    pass


class ValidationError(ApplicationError):
    """Raised when submitted data is malformed."""
    status_code = 400
    default_message = "Datos inválidos"


class NotFoundError(ApplicationError):
    """Raised when a prize or spin record does not exist."""
    status_code = 404
    default_message = "No encontrado"


class ServiceError(ApplicationError):
    """Base exception for service-level errors."""
    pass


class CatalogEmptyError(ServiceError):
    """Raised when a spin is attempted with no prizes configured."""
    status_code = 400
    default_message = "No hay premios configurados"


class RateLimitError(ServiceError):
    """Raised when a DNI is still inside its cooldown window."""

    status_code = 429

    def __init__(self, retry_in_ms: int) -> None:
        self.retry_in_ms = retry_in_ms
        self.hours = retry_in_ms // 3_600_000
        self.minutes = -(-(retry_in_ms % 3_600_000) // 60_000)
        super().__init__(
            f"Este DNI ya giró. Faltan {self.hours}h {self.minutes}m para volver a tirar."
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "retryInMs": self.retry_in_ms}


class AuthenticationError(ApplicationError):
    """Base exception for admin authentication failures."""
    status_code = 401
    default_message = "No autorizado"


class InvalidCredentialsError(AuthenticationError):
    """Raised when the supplied admin code does not match."""
    default_message = "Código incorrecto"


class UnauthorizedError(AuthenticationError):
    """Raised when a session is missing, expired or forged."""
    pass
