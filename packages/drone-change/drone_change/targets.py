"""Per-population change strategies, keyed by EntityKind."""
from __future__ import annotations

import logging
import random

from drone import (
    CapacityExceededError,
    Entity,
    EntityKind,
    EntityRegistry,
    NoEligibleTargetError,
)

from drone_change.types import ChangeAction, PendingChange
from drone_change.variation import pick_different_variation

logger = logging.getLogger(__name__)


class ChangeTarget:
    """How one population takes a daily change and how it grows.

    Subclasses set ``kind`` and implement ``choose`` and ``grow``.
    """

    kind: EntityKind

    def choose(
        self, registry: EntityRegistry, rng: random.Random, day: int,
    ) -> PendingChange | None:
        raise NotImplementedError

    def grow(self, registry: EntityRegistry, rng: random.Random) -> Entity:
        """Add one entity. Raises CapacityExceededError when full."""
        raise NotImplementedError

    def mutate(
        self, registry: EntityRegistry, rng: random.Random, day: int,
    ) -> PendingChange:
        eligible = registry.eligible_for_mutation(self.kind)
        if not eligible:
            raise NoEligibleTargetError(f"No {self.kind.value} can change variation")
        entity = rng.choice(eligible)
        previous = entity.current_variation
        variation = pick_different_variation(entity.variation_pool, previous, rng)
        registry.apply_variation(entity.id, variation)
        return PendingChange(
            target_id=entity.id,
            kind=self.kind,
            action=ChangeAction.MUTATE,
            day=day,
            from_variation=previous,
            to_variation=variation,
        )


class CommuterTarget(ChangeTarget):
    """Commuters only ever mutate. New commuters prefer types not yet on the platform."""

    kind = EntityKind.COMMUTER

    def choose(self, registry, rng, day):
        try:
            return self.mutate(registry, rng, day)
        except NoEligibleTargetError:
            logger.info("Day %d: no commuter can change", day)
            return None

    def grow(self, registry, rng):
        types = registry.types(self.kind)
        if not types:
            raise ValueError("No commuter types configured")
        if registry.count(self.kind) == 0:
            return registry.add(self.kind, types[0])
        used = {e.type for e in registry.entities(self.kind)}
        unused = [t for t in types if t not in used]
        return registry.add(self.kind, rng.choice(unused or types))


class SetDressingTarget(ChangeTarget):
    """Props mostly appear; sometimes an existing one changes.

    Below ``min_population`` a new prop is always added. Otherwise a prop is
    added with probability ``add_probability`` while there is room, and an
    existing one is mutated the rest of the time. A mutate with no eligible
    prop falls back to adding one.
    """

    kind = EntityKind.SET_DRESSING

    def __init__(self, min_population: int = 4, add_probability: float = 0.8) -> None:
        if min_population < 0:
            raise ValueError(f"min_population must be >= 0, got {min_population}")
        if not 0.0 <= add_probability <= 1.0:
            raise ValueError(f"add_probability must be in [0, 1], got {add_probability}")
        self.min_population = min_population
        self.add_probability = add_probability

    def choose(self, registry, rng, day):
        if not registry.is_full(self.kind) and (
            registry.count(self.kind) < self.min_population
            or rng.random() < self.add_probability
        ):
            return self._add(registry, rng, day)
        try:
            return self.mutate(registry, rng, day)
        except NoEligibleTargetError:
            logger.debug("Day %d: no prop can change, adding one instead", day)
        return self._add(registry, rng, day)

    def grow(self, registry, rng):
        types = registry.types(self.kind)
        if not types:
            raise ValueError("No set-dressing types configured")
        return registry.add(self.kind, rng.choice(types))

    def _add(self, registry, rng, day):
        if not registry.types(self.kind):
            logger.info("Day %d: no prop types configured, no change today", day)
            return None
        try:
            entity = self.grow(registry, rng)
        except CapacityExceededError:
            logger.info("Day %d: set dressing is full, no change today", day)
            return None
        return PendingChange(
            target_id=entity.id,
            kind=self.kind,
            action=ChangeAction.ADD,
            day=day,
        )


def default_targets() -> dict[EntityKind, ChangeTarget]:
    return {
        EntityKind.COMMUTER: CommuterTarget(),
        EntityKind.SET_DRESSING: SetDressingTarget(),
    }
