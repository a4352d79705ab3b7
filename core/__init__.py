"""Core application components."""

# Import in correct order to avoid circular dependencies
from core.logger import setup_logger, get_logger
from core.constants import (
    MS_PER_HOUR,
    SEED_PRIZES,
    BusinessDefaults,
    SessionDefaults,
    SpinDefaults,
    SpinState,
)
from core.exceptions import (
    ApplicationError,
    AuthenticationError,
    CatalogEmptyError,
    ConfigurationError,
    DatabaseError,
    InvalidCredentialsError,
    NotFoundError,
    RateLimitError,
    ServiceError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    # Initializer
    'ApplicationInitializer',
    # Logging
    'setup_logger',
    'get_logger',
    # Constants
    'MS_PER_HOUR',
    'SEED_PRIZES',
    'BusinessDefaults',
    'SessionDefaults',
    'SpinDefaults',
    'SpinState',
    # Exceptions
    'ApplicationError',
    'AuthenticationError',
    'CatalogEmptyError',
    'ConfigurationError',
    'DatabaseError',
    'InvalidCredentialsError',
    'NotFoundError',
    'RateLimitError',
    'ServiceError',
    'StoreError',
    'UnauthorizedError',
    'ValidationError',
]

# Import ApplicationInitializer last to avoid circular imports
from core.app_initializer import ApplicationInitializer

