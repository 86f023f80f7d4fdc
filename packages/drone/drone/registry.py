"""EntityRegistry - the two populations of changeable scene entities."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from drone.types import (
    CapacityExceededError,
    CorruptStateError,
    Entity,
    EntityId,
    EntityKind,
    InvalidVariationError,
    UnknownEntityError,
)

# Hook callback signatures.
AddHook = Callable[[Entity], None]
ChangeHook = Callable[[Entity, str], None]

DEFAULT_CAPACITY = 8


class EntityRegistry:
    def __init__(
        self,
        pools: Mapping[EntityKind, Mapping[str, Sequence[str]]],
        capacities: Mapping[EntityKind, int] | None = None,
    ) -> None:
        self._pools: dict[EntityKind, dict[str, tuple[str, ...]]] = {
            kind: {t: tuple(p) for t, p in pools.get(kind, {}).items()}
            for kind in EntityKind
        }
        caps = dict(capacities or {})
        self._capacities: dict[EntityKind, int] = {
            kind: caps.get(kind, DEFAULT_CAPACITY) for kind in EntityKind
        }
        for kind, cap in self._capacities.items():
            if cap < 0:
                raise ValueError(f"capacity for {kind.value} must be >= 0, got {cap}")
        self._entities: dict[EntityId, Entity] = {}
        self._by_kind: dict[EntityKind, list[EntityId]] = {kind: [] for kind in EntityKind}
        self._on_add: list[AddHook] = []
        self._on_change: list[ChangeHook] = []
        self._hooks_enabled = True

    # -- Population --

    def add(self, kind: EntityKind, type: str) -> Entity:
        ids = self._by_kind[kind]
        if len(ids) >= self._capacities[kind]:
            raise CapacityExceededError(kind, self._capacities[kind])
        pool = self._pools[kind].get(type)
        if not pool:
            raise ValueError(f"No variations known for {kind.value} type {type!r}")
        entity = Entity(
            id=f"{kind.value}-{len(ids)}",
            kind=kind,
            type=type,
            current_variation=pool[0],
            variation_pool=pool,
            index=len(ids),
        )
        self._entities[entity.id] = entity
        ids.append(entity.id)
        if self._hooks_enabled:
            for cb in self._on_add:
                cb(entity)
        return entity

    def get(self, entity_id: EntityId) -> Entity:
        entity = self._entities.get(entity_id)
        if entity is None:
            raise UnknownEntityError(entity_id, f"Unknown entity {entity_id!r}")
        return entity

    def has(self, entity_id: EntityId) -> bool:
        return entity_id in self._entities

    def entities(self, kind: EntityKind | None = None) -> list[Entity]:
        if kind is None:
            return list(self._entities.values())
        return [self._entities[eid] for eid in self._by_kind[kind]]

    def first(self, kind: EntityKind) -> Entity | None:
        ids = self._by_kind[kind]
        return self._entities[ids[0]] if ids else None

    def count(self, kind: EntityKind) -> int:
        return len(self._by_kind[kind])

    def is_full(self, kind: EntityKind) -> bool:
        return self.count(kind) >= self._capacities[kind]

    def types(self, kind: EntityKind) -> list[str]:
        """Types with at least one known variation, in configuration order."""
        return [t for t, pool in self._pools[kind].items() if pool]

    def eligible_for_mutation(self, kind: EntityKind) -> list[Entity]:
        return [e for e in self.entities(kind) if e.mutable]

    def empty_copy(self) -> EntityRegistry:
        """Same pools and capacities, no entities and no hooks."""
        return EntityRegistry(self._pools, self._capacities)

    # -- Mutation --

    def apply_variation(self, entity_id: EntityId, variation: str) -> None:
        entity = self.get(entity_id)
        if variation not in entity.variation_pool:
            raise InvalidVariationError(entity_id, variation)
        previous = entity.current_variation
        entity.current_variation = variation
        if self._hooks_enabled and previous != variation:
            for cb in self._on_change:
                cb(entity, previous)

    def clear(self) -> None:
        self._entities.clear()
        for ids in self._by_kind.values():
            ids.clear()

    # -- Hooks --

    def on_add(self, callback: AddHook) -> None:
        self._on_add.append(callback)

    def on_change(self, callback: ChangeHook) -> None:
        self._on_change.append(callback)

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        return {
            "entities": [
                {
                    "kind": e.kind.value,
                    "type": e.type,
                    "variation": e.current_variation,
                }
                for e in self._entities.values()
            ],
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Rebuild the population in snapshot order. Hooks do not fire.

        The registry is left empty if any record is malformed.
        """
        self._hooks_enabled = False
        try:
            self.clear()
            for record in data.get("entities", []):
                try:
                    kind = EntityKind(record["kind"])
                    entity = self.add(kind, record["type"])
                    self.apply_variation(entity.id, record["variation"])
                except (KeyError, TypeError, ValueError, CapacityExceededError) as exc:
                    self.clear()
                    raise CorruptStateError(f"Bad entity record {record!r}: {exc}") from exc
        finally:
            self._hooks_enabled = True
