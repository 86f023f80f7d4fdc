"""Game configuration: defaults, JSON overrides, and startup validation."""
from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from drone import ConfigError, EntityKind
from drone_awareness import AwarenessConfig
from drone_awareness.config import DEFAULT_XP_MULTIPLIERS, DEFAULT_XP_REQUIREMENTS
from drone_change import PoolSchedule, make_alternating_schedule, make_weighted_schedule


class WrongClickPolicy(Enum):
    RETRY = "retry"
    GAME_OVER = "game-over"


Position = tuple[int, int]

# Sprite variation pools per type. The first entry is the initial look.
DEFAULT_COMMUTER_POOLS: dict[str, tuple[str, ...]] = {
    f"commuter{i}": (f"commuter{i}.png", f"commuter{i}_a.png") for i in range(1, 9)
}

DEFAULT_SET_DRESSING_POOLS: dict[str, tuple[str, ...]] = {
    "bench": ("bench.png", "bench_a.png"),
    "bottle": ("bottle.png",),
    "caution": ("caution.png", "caution_a.png"),
    "trash": ("trash.png", "trash_a.png"),
    "trashcan": ("trashcan.png",),
}

# [left %, bottom %] slots, assigned by insertion index.
DEFAULT_COMMUTER_POSITIONS: tuple[Position, ...] = (
    (50, 22), (11, 23), (25, 20), (37, 22),
    (63, 21), (75, 23), (88, 20), (4, 21),
)

DEFAULT_SET_DRESSING_POSITIONS: tuple[Position, ...] = (
    (22, 15), (45, 16), (65, 15), (80, 14),
    (95, 15), (8, 16), (35, 17), (55, 15),
)


@dataclass(frozen=True)
class Timings:
    """Durations of the deferred day-cycle steps, in milliseconds."""

    missed_highlight_ms: int = 1500
    fade_out_ms: int = 500
    fade_in_ms: int = 500
    hint_cooldown_ms: int = 5000


@dataclass(frozen=True)
class GameConfig:
    """Immutable, session-wide game configuration.

    Attributes:
        max_level: Awareness level that completes the game.
        xp_requirements: XP to leave each level, starting at level 1.
        xp_multipliers: Per-level XP gain multiplier (missing = 1.0).
        base_xp_for_finding_change: Raw XP for a correct click.
        base_xp_for_taking_train: Raw XP for an uneventful commute after day 4.
        commuter_pools: Variation pools per commuter type, in priority order.
            The first type is always the first commuter on the platform.
        set_dressing_pools: Variation pools per prop type.
        commuter_capacity: Maximum number of commuters.
        set_dressing_capacity: Maximum number of props.
        commuter_positions: Position slot per commuter index.
        set_dressing_positions: Position slot per prop index.
        initial_set_dressing: Props placed before day 1.
        set_dressing_min_population: Props are always added below this count.
        set_dressing_add_probability: Chance of adding rather than changing a prop.
        pool_schedule: ``"weighted"`` or ``"alternating"``.
        commuter_weight: Weighted schedule's chance of a commuter change.
        wrong_click_policy: Whether a wrong click ends the session.
        timings: Day-cycle durations.
    """

    max_level: int = 10
    xp_requirements: tuple[int, ...] = DEFAULT_XP_REQUIREMENTS
    xp_multipliers: dict[int, float] = field(
        default_factory=lambda: dict(DEFAULT_XP_MULTIPLIERS)
    )
    base_xp_for_finding_change: int = 50
    base_xp_for_taking_train: int = 5
    commuter_pools: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_COMMUTER_POOLS)
    )
    set_dressing_pools: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_SET_DRESSING_POOLS)
    )
    commuter_capacity: int = 8
    set_dressing_capacity: int = 8
    commuter_positions: tuple[Position, ...] = DEFAULT_COMMUTER_POSITIONS
    set_dressing_positions: tuple[Position, ...] = DEFAULT_SET_DRESSING_POSITIONS
    initial_set_dressing: int = 3
    set_dressing_min_population: int = 4
    set_dressing_add_probability: float = 0.8
    pool_schedule: str = "weighted"
    commuter_weight: float = 0.5
    wrong_click_policy: WrongClickPolicy = WrongClickPolicy.RETRY
    timings: Timings = field(default_factory=Timings)

    def awareness_config(self) -> AwarenessConfig:
        return AwarenessConfig(
            max_level=self.max_level,
            xp_requirements=self.xp_requirements,
            xp_multipliers=dict(self.xp_multipliers),
        )

    def pools(self) -> dict[EntityKind, dict[str, tuple[str, ...]]]:
        return {
            EntityKind.COMMUTER: dict(self.commuter_pools),
            EntityKind.SET_DRESSING: dict(self.set_dressing_pools),
        }

    def capacities(self) -> dict[EntityKind, int]:
        return {
            EntityKind.COMMUTER: self.commuter_capacity,
            EntityKind.SET_DRESSING: self.set_dressing_capacity,
        }

    def positions(self, kind: EntityKind) -> tuple[Position, ...]:
        if kind is EntityKind.COMMUTER:
            return self.commuter_positions
        return self.set_dressing_positions

    def make_pool_schedule(self) -> PoolSchedule:
        if self.pool_schedule == "alternating":
            return make_alternating_schedule()
        return make_weighted_schedule(self.commuter_weight)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GameConfig:
        """Defaults overridden by the keys present in *data*.

        Raises ConfigError on unknown keys or values of the wrong shape.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        overrides: dict[str, Any] = {}
        try:
            for key, value in data.items():
                overrides[key] = _coerce(key, value)
        except (AttributeError, TypeError, ValueError, KeyError) as exc:
            raise ConfigError(f"Bad value for {key!r}: {exc}") from exc
        return replace(cls(), **overrides)


def _coerce(key: str, value: Any) -> Any:
    if key == "xp_requirements":
        return tuple(int(v) for v in value)
    if key == "xp_multipliers":
        return {int(k): float(v) for k, v in value.items()}
    if key in ("commuter_pools", "set_dressing_pools"):
        return {str(t): tuple(str(v) for v in pool) for t, pool in value.items()}
    if key in ("commuter_positions", "set_dressing_positions"):
        return tuple((int(x), int(y)) for x, y in value)
    if key == "wrong_click_policy":
        return WrongClickPolicy(value)
    if key == "timings":
        return replace(Timings(), **{k: int(v) for k, v in value.items()})
    if key in ("set_dressing_add_probability", "commuter_weight"):
        return float(value)
    if key == "pool_schedule":
        return str(value)
    return int(value)


def load_config(path: str | Path) -> GameConfig:
    """Read JSON overrides from *path* and validate the merged config."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must hold a JSON object")
    config = GameConfig.from_dict(data)
    validate_config(config)
    return config


def validate_config(config: GameConfig) -> None:
    """Reject configurations the day cycle cannot play. Raises ConfigError."""
    try:
        config.awareness_config()
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    if config.commuter_capacity < 1:
        raise ConfigError("commuter_capacity must be >= 1")
    if config.set_dressing_capacity < 0:
        raise ConfigError("set_dressing_capacity must be >= 0")
    for kind in EntityKind:
        capacity = config.capacities()[kind]
        slots = len(config.positions(kind))
        if slots < capacity:
            raise ConfigError(
                f"{kind.value} has {slots} position slots for capacity {capacity}"
            )

    if not config.commuter_pools:
        raise ConfigError("At least one commuter type is required")
    first_type, first_pool = next(iter(config.commuter_pools.items()))
    if len(first_pool) < 2:
        raise ConfigError(
            f"First commuter type {first_type!r} needs at least two variations "
            "for the scripted first change"
        )

    if not 0 <= config.initial_set_dressing <= config.set_dressing_capacity:
        raise ConfigError(
            f"initial_set_dressing {config.initial_set_dressing} outside "
            f"0..{config.set_dressing_capacity}"
        )
    if config.initial_set_dressing and not any(config.set_dressing_pools.values()):
        raise ConfigError("initial_set_dressing needs at least one prop type")
    if config.base_xp_for_finding_change < 0 or config.base_xp_for_taking_train < 0:
        raise ConfigError("Base XP grants must be >= 0")
    if config.pool_schedule not in ("weighted", "alternating"):
        raise ConfigError(f"Unknown pool_schedule {config.pool_schedule!r}")
    if not 0.0 <= config.commuter_weight <= 1.0:
        raise ConfigError("commuter_weight must be in [0, 1]")
    if not 0.0 <= config.set_dressing_add_probability <= 1.0:
        raise ConfigError("set_dressing_add_probability must be in [0, 1]")
    timings = config.timings
    for f in fields(timings):
        if getattr(timings, f.name) < 0:
            raise ConfigError(f"timings.{f.name} must be >= 0")
