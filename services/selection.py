"""Weighted prize selection."""

from __future__ import annotations

import random
from typing import Callable, Optional, Protocol, Sequence, TypeVar


class Weighted(Protocol):
    weight: float


W = TypeVar("W", bound=Weighted)


def pick_weighted(prizes: Sequence[W], rand: Callable[[], float] = random.random) -> Optional[W]:
    """Roulette-wheel choice proportional to ``weight``.

    Prizes with a non-positive weight never win while any positive weight
    exists. When none does, the first positive-weight prize is returned or,
    failing that, the first prize of the catalog, so a non-empty catalog
    always yields a prize.

    Args:
        prizes: Catalog in its listing order
        rand: Source of uniform floats in ``[0, 1)``

    Returns:
        The chosen prize, or None for an empty catalog
    """
    candidates = [prize for prize in prizes if (prize.weight or 0) > 0]
    total = sum(prize.weight for prize in candidates)
    if total <= 0:
        if candidates:
            return candidates[0]
        return prizes[0] if prizes else None

    r = rand() * total
    for prize in candidates:
        if r < prize.weight:
            return prize
        r -= prize.weight
    # Float rounding left r just past the last bucket
    return candidates[-1]
