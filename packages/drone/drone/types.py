"""Shared types, entity records, and error classes for the drone engine."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

EntityId = str


class EntityKind(Enum):
    """The two changeable populations in the scene."""

    COMMUTER = "commuter"
    SET_DRESSING = "set-dressing"


@dataclass
class Entity:
    """One changeable scene actor.

    ``index`` is the insertion order within its kind; renderers use it to
    look up a fixed position slot.
    """

    id: EntityId
    kind: EntityKind
    type: str
    current_variation: str
    variation_pool: tuple[str, ...]
    index: int

    @property
    def mutable(self) -> bool:
        return len(self.variation_pool) > 1


@dataclass(frozen=True, slots=True)
class StepContext:
    step_number: int
    dt_ms: int
    now_ms: int
    random: _random.Random


class UnknownEntityError(KeyError):
    """Raised when operating on an entity id the registry does not hold."""

    def __init__(self, entity_id: EntityId, message: str) -> None:
        self.entity_id = entity_id
        super().__init__(message)


class InvalidVariationError(ValueError):
    """Raised when a variation is not part of the entity's pool."""

    def __init__(self, entity_id: EntityId, variation: str) -> None:
        self.entity_id = entity_id
        self.variation = variation
        super().__init__(f"{variation!r} is not a variation of entity {entity_id}")


class CapacityExceededError(Exception):
    """Raised when a population is already at its configured maximum."""

    def __init__(self, kind: EntityKind, capacity: int) -> None:
        self.kind = kind
        self.capacity = capacity
        super().__init__(f"{kind.value} population is full ({capacity})")


class NoEligibleTargetError(LookupError):
    """Raised when no entity can take a mutate change."""


class CorruptStateError(Exception):
    """Raised on restore failures (bad version, malformed fields)."""


class ConfigError(ValueError):
    """Raised at startup when the game configuration is inconsistent."""


if TYPE_CHECKING:
    from drone.engine import Engine

System = Callable[["Engine", StepContext], None]
