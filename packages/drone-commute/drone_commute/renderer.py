"""Renderer protocol consumed by the day cycle."""
from __future__ import annotations

from typing import Protocol

from drone import Entity, EntityId


class Renderer(Protocol):
    def render(self, entity: Entity) -> None: ...

    def update_variation(self, entity_id: EntityId, variation: str) -> None: ...


class NullRenderer:
    """Draws nothing."""

    def render(self, entity: Entity) -> None:
        pass

    def update_variation(self, entity_id: EntityId, variation: str) -> None:
        pass
