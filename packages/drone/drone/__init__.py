"""drone - Deterministic runtime for the daily-commute change engine."""

from drone.clock import Clock
from drone.engine import Engine
from drone.phases import Phase, PhaseQueue
from drone.registry import EntityRegistry
from drone.scheduler import Deferred, Scheduler
from drone.types import (
    CapacityExceededError,
    ConfigError,
    CorruptStateError,
    Entity,
    EntityId,
    EntityKind,
    InvalidVariationError,
    NoEligibleTargetError,
    StepContext,
    UnknownEntityError,
)

__all__ = [
    "Engine",
    "Clock",
    "Scheduler",
    "Deferred",
    "Phase",
    "PhaseQueue",
    "EntityRegistry",
    "Entity",
    "EntityId",
    "EntityKind",
    "StepContext",
    "CapacityExceededError",
    "ConfigError",
    "CorruptStateError",
    "InvalidVariationError",
    "NoEligibleTargetError",
    "UnknownEntityError",
]
