"""Helpers for choosing a variation other than the current one."""
from __future__ import annotations

import random
from typing import Sequence

from drone import NoEligibleTargetError


def pick_different_variation(
    pool: Sequence[str], current: str, rng: random.Random,
) -> str:
    """Uniform pick among pool entries that differ from *current*."""
    options = [v for v in pool if v != current]
    if not options:
        raise NoEligibleTargetError(f"No variation other than {current!r} in {list(pool)!r}")
    return rng.choice(options)


def first_different_variation(pool: Sequence[str], current: str) -> str | None:
    for variation in pool:
        if variation != current:
            return variation
    return None
