"""AwarenessTracker - XP accrual and level resolution."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from drone_awareness.config import AwarenessConfig


@dataclass(frozen=True)
class LevelUp:
    previous: int
    new: int


class AwarenessTracker:
    """Owns the (level, xp) pair.

    After every call ``0 <= xp < requirement(level)``, except at the max
    level where xp is pinned to the (zero) requirement.
    """

    def __init__(self, config: AwarenessConfig | None = None) -> None:
        self._config = config or AwarenessConfig()
        self._level = 1
        self._xp = 0
        self._last_gain = 0

    @property
    def config(self) -> AwarenessConfig:
        return self._config

    @property
    def level(self) -> int:
        return self._level

    @property
    def xp(self) -> int:
        return self._xp

    @property
    def last_gain(self) -> int:
        """Multiplier-adjusted amount applied by the latest ``add_xp``."""
        return self._last_gain

    @property
    def is_max(self) -> bool:
        return self._level >= self._config.max_level

    def requirement(self, level: int | None = None) -> int:
        return self._config.requirement(self._level if level is None else level)

    def progress(self) -> float:
        """Fill fraction of the current level's bar, 1.0 at max level."""
        if self.is_max:
            return 1.0
        return self._xp / self.requirement()

    def adjusted(self, raw: float) -> int:
        return math.floor(raw * self._config.multiplier(self._level))

    def add_xp(self, raw: float) -> list[LevelUp]:
        if raw < 0:
            raise ValueError(f"XP grants must be >= 0, got {raw}")
        gain = self.adjusted(raw)
        self._last_gain = gain
        self._xp += gain

        events: list[LevelUp] = []
        max_level = self._config.max_level
        while self._level < max_level and self._xp >= self.requirement():
            excess = self._xp - self.requirement()
            previous = self._level
            self._level += 1
            self._xp = excess
            events.append(LevelUp(previous=previous, new=self._level))

        if self._level >= max_level:
            self._xp = min(self._xp, self.requirement())
        return events

    def restore(self, level: int, xp: int) -> None:
        if not 1 <= level <= self._config.max_level:
            raise ValueError(f"level {level} outside 1..{self._config.max_level}")
        limit = self._config.requirement(level)
        if level >= self._config.max_level:
            if xp != limit:
                raise ValueError(f"xp at max level must be {limit}, got {xp}")
        elif not 0 <= xp < limit:
            raise ValueError(f"xp {xp} outside 0..{limit - 1} for level {level}")
        self._level = level
        self._xp = xp
        self._last_gain = 0

    def reset(self) -> None:
        self._level = 1
        self._xp = 0
        self._last_gain = 0

    def snapshot(self) -> dict[str, Any]:
        return {"level": self._level, "xp": self._xp}
