"""Awareness progression configuration."""
from __future__ import annotations

from dataclasses import dataclass, field

# XP needed to go from level n to n+1, starting at level 1.
DEFAULT_XP_REQUIREMENTS: tuple[int, ...] = (100, 150, 200, 250, 300, 350, 400, 450, 500)

DEFAULT_XP_MULTIPLIERS: dict[int, float] = {6: 1.25, 7: 1.25, 8: 1.5, 9: 1.5}


@dataclass(frozen=True)
class AwarenessConfig:
    """Immutable level table for the awareness tracker.

    Attributes:
        max_level: Highest reachable level; reaching it completes the game.
        xp_requirements: XP to advance from level ``i + 1`` to ``i + 2``.
            Must cover levels ``1 .. max_level - 1`` and never decrease.
        xp_multipliers: Per-level gain multiplier. Levels without an entry
            use 1.0.
    """

    max_level: int = 10
    xp_requirements: tuple[int, ...] = DEFAULT_XP_REQUIREMENTS
    xp_multipliers: dict[int, float] = field(
        default_factory=lambda: dict(DEFAULT_XP_MULTIPLIERS)
    )

    def __post_init__(self) -> None:
        if self.max_level < 1:
            raise ValueError(f"max_level must be >= 1, got {self.max_level}")
        needed = self.max_level - 1
        if len(self.xp_requirements) < needed:
            raise ValueError(
                f"xp_requirements covers {len(self.xp_requirements)} levels, "
                f"need {needed} for max_level {self.max_level}"
            )
        table = self.xp_requirements[:needed]
        if any(req <= 0 for req in table):
            raise ValueError("xp_requirements must be positive")
        if any(b < a for a, b in zip(table, table[1:])):
            raise ValueError("xp_requirements must be non-decreasing")
        for level, mult in self.xp_multipliers.items():
            if mult < 0:
                raise ValueError(f"multiplier for level {level} must be >= 0, got {mult}")

    def requirement(self, level: int) -> int:
        """XP needed to leave *level*. 0 at (or past) the max level."""
        if level >= self.max_level:
            return 0
        return self.xp_requirements[level - 1]

    def multiplier(self, level: int) -> float:
        return self.xp_multipliers.get(level, 1.0)
