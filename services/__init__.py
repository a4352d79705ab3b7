"""Services package."""

from .async_runner import run_async
from .business_config import BusinessConfigService
from .catalog import PrizeCatalog
from .selection import pick_weighted
from .spin_engine import SpinEngine, SpinResult, classify

__all__ = [
    "run_async",
    "BusinessConfigService",
    "PrizeCatalog",
    "pick_weighted",
    "SpinEngine",
    "SpinResult",
    "classify",
]
