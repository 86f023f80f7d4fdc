"""ChangeSelector - produces the day's single PendingChange."""
from __future__ import annotations

import logging
import random
from typing import Mapping

from drone import CapacityExceededError, Entity, EntityKind, EntityRegistry

from drone_change.targets import ChangeTarget, default_targets
from drone_change.types import ChangeAction, PendingChange
from drone_change.variation import first_different_variation

logger = logging.getLogger(__name__)

TUTORIAL_DAY = 4


class ChangeSelector:
    def __init__(
        self,
        registry: EntityRegistry,
        rng: random.Random,
        targets: Mapping[EntityKind, ChangeTarget] | None = None,
    ) -> None:
        self._registry = registry
        self._rng = rng
        self._targets = dict(targets) if targets is not None else default_targets()
        missing = [kind.value for kind in EntityKind if kind not in self._targets]
        if missing:
            raise ValueError(f"No change target for {', '.join(missing)}")

    @property
    def registry(self) -> EntityRegistry:
        return self._registry

    def target(self, kind: EntityKind) -> ChangeTarget:
        return self._targets[kind]

    def first_change(self, day: int = TUTORIAL_DAY) -> PendingChange | None:
        """Scripted change on the first commuter: its first other variation."""
        entity = self._registry.first(EntityKind.COMMUTER)
        if entity is None:
            logger.warning("Day %d: no commuter for the scripted change", day)
            return None
        previous = entity.current_variation
        variation = first_different_variation(entity.variation_pool, previous)
        if variation is None:
            logger.warning("Day %d: %s has a single variation", day, entity.id)
            return None
        self._registry.apply_variation(entity.id, variation)
        return PendingChange(
            target_id=entity.id,
            kind=EntityKind.COMMUTER,
            action=ChangeAction.MUTATE,
            day=day,
            from_variation=previous,
            to_variation=variation,
        )

    def random_change(self, kind: EntityKind, day: int = 0) -> PendingChange | None:
        return self._targets[kind].choose(self._registry, self._rng, day)

    def add_entity(self, kind: EntityKind) -> Entity | None:
        try:
            return self._targets[kind].grow(self._registry, self._rng)
        except CapacityExceededError:
            logger.info("%s population is full", kind.value)
            return None
