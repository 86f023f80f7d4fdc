"""Platform scene: entities drawn as labelled blocks at their position slots."""
from __future__ import annotations

from dataclasses import dataclass

import pygame

from drone import Entity, EntityKind
from ui.constants import (
    COLOR_HIGHLIGHT,
    COLOR_OUTLINE,
    COLOR_PLATFORM,
    COLOR_PLATFORM_EDGE,
    COLOR_SKY,
    COMMUTER_SIZE,
    PROP_SIZE,
    SCENE_H,
    SCENE_W,
    TYPE_COLORS,
)


@dataclass
class Sprite:
    entity_id: str
    kind: EntityKind
    type: str
    variation: str
    rect: pygame.Rect


def _lighten(color: tuple[int, int, int], amount: int = 70) -> tuple[int, int, int]:
    return tuple(min(255, c + amount) for c in color)  # type: ignore[return-value]


class SceneRenderer:
    """Renderer for the day cycle. Keeps one Sprite per entity.

    Positions are ``(left %, bottom %)`` slots; the block's bottom centre
    sits on that point of the scene.
    """

    def __init__(self, positions: dict[EntityKind, tuple[tuple[int, int], ...]], top: int) -> None:
        self._positions = positions
        self._top = top
        self.sprites: dict[str, Sprite] = {}
        self.highlight: str | None = None

    def render(self, entity: Entity) -> None:
        left, bottom = self._positions[entity.kind][entity.index]
        w, h = COMMUTER_SIZE if entity.kind is EntityKind.COMMUTER else PROP_SIZE
        cx = SCENE_W * left // 100
        by = self._top + SCENE_H - SCENE_H * bottom // 100
        self.sprites[entity.id] = Sprite(
            entity_id=entity.id,
            kind=entity.kind,
            type=entity.type,
            variation=entity.current_variation,
            rect=pygame.Rect(cx - w // 2, by - h, w, h),
        )

    def update_variation(self, entity_id: str, variation: str) -> None:
        sprite = self.sprites.get(entity_id)
        if sprite is not None:
            sprite.variation = variation

    def clear(self) -> None:
        self.sprites.clear()
        self.highlight = None

    def hit_test(self, pos: tuple[int, int]) -> str | None:
        """Topmost entity under *pos*. Props are drawn last, so they win."""
        for sprite in reversed(self._draw_order()):
            if sprite.rect.collidepoint(pos):
                return sprite.entity_id
        return None

    def _draw_order(self) -> list[Sprite]:
        return sorted(self.sprites.values(), key=lambda s: (s.kind is EntityKind.SET_DRESSING, s.rect.bottom))

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        pygame.draw.rect(surface, COLOR_SKY, (0, self._top, SCENE_W, SCENE_H))
        platform_y = self._top + SCENE_H * 2 // 3
        pygame.draw.rect(surface, COLOR_PLATFORM, (0, platform_y, SCENE_W, SCENE_H - SCENE_H * 2 // 3))
        pygame.draw.line(surface, COLOR_PLATFORM_EDGE, (0, platform_y), (SCENE_W, platform_y), 3)

        for sprite in self._draw_order():
            color = TYPE_COLORS.get(sprite.type, (150, 150, 150))
            if "_a" in sprite.variation:
                color = _lighten(color)
            pygame.draw.rect(surface, color, sprite.rect)
            outline = COLOR_HIGHLIGHT if sprite.entity_id == self.highlight else COLOR_OUTLINE
            pygame.draw.rect(surface, outline, sprite.rect, 3 if outline is COLOR_HIGHLIGHT else 1)
            label = font.render(sprite.type, True, (230, 230, 230))
            surface.blit(label, label.get_rect(midtop=(sprite.rect.centerx, sprite.rect.bottom + 2)))
