"""Input validation helpers."""

import math
import re
from typing import Any, Optional

from core.constants import SpinDefaults


DNI_RE = re.compile(rf"[0-9]{{{SpinDefaults.DNI_LENGTH}}}")


def validate_dni(value: Any) -> bool:
    """A DNI is exactly eight ASCII digits, no padding or separators."""
    return isinstance(value, str) and DNI_RE.fullmatch(value) is not None


def clean_text(value: Any) -> Optional[str]:
    """Return the trimmed string, or None when ``value`` is not a string."""
    if not isinstance(value, str):
        return None
    return value.strip()


def validate_weight(value: Any) -> bool:
    # bool is an int subclass but never a meaningful weight
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value) and value >= 0
    except OverflowError:
        # JSON integers beyond float range
        return False
