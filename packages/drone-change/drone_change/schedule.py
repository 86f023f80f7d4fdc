"""Pool schedules: which population changes on a given day."""
from __future__ import annotations

import random
from typing import Callable

from drone import EntityKind

PoolSchedule = Callable[[int, random.Random], EntityKind]


def make_weighted_schedule(commuter_weight: float = 0.5) -> PoolSchedule:
    """Commuters with probability *commuter_weight*, set dressing otherwise."""
    if not 0.0 <= commuter_weight <= 1.0:
        raise ValueError(f"commuter_weight must be in [0, 1], got {commuter_weight}")

    def weighted(day: int, rng: random.Random) -> EntityKind:
        if rng.random() < commuter_weight:
            return EntityKind.COMMUTER
        return EntityKind.SET_DRESSING

    return weighted


def make_alternating_schedule(
    first: EntityKind = EntityKind.COMMUTER,
) -> PoolSchedule:
    """Switch pools every day, starting with *first* on odd days."""
    second = (
        EntityKind.SET_DRESSING if first is EntityKind.COMMUTER else EntityKind.COMMUTER
    )

    def alternating(day: int, rng: random.Random) -> EntityKind:
        return first if day % 2 else second

    return alternating
