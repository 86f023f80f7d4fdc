"""HUD: day counter, awareness bar, narration, and end-of-game overlays."""
from __future__ import annotations

import pygame

from drone_commute import DayState, Session
from ui.constants import (
    COLOR_BAR_BG,
    COLOR_BAR_FILL,
    COLOR_HUD_BG,
    COLOR_TEXT,
    COLOR_TEXT_DIM,
    HUD_H,
    SCENE_H,
    SCENE_W,
)


def draw_hud(
    surface: pygame.Surface,
    font: pygame.font.Font,
    session: Session,
    narration: str,
) -> None:
    pygame.draw.rect(surface, COLOR_HUD_BG, (0, 0, SCENE_W, HUD_H))
    ctx = session.day_cycle.context
    tracker = session.tracker

    surface.blit(font.render(f"Day {ctx.day}", True, COLOR_TEXT), (10, 8))
    surface.blit(
        font.render(f"Awareness {tracker.level}/{tracker.config.max_level}", True, COLOR_TEXT),
        (100, 8),
    )

    bar = pygame.Rect(280, 10, 300, 12)
    pygame.draw.rect(surface, COLOR_BAR_BG, bar)
    fill = bar.copy()
    fill.width = int(bar.width * tracker.progress())
    pygame.draw.rect(surface, COLOR_BAR_FILL, fill)

    keys = "Space: take the train   H: hint   R: restart"
    surface.blit(font.render(keys, True, COLOR_TEXT_DIM), (10, HUD_H - 22))
    surface.blit(font.render(narration, True, COLOR_TEXT), (10, 30))


def draw_fade(surface: pygame.Surface, top: int, alpha: int) -> None:
    if alpha <= 0:
        return
    overlay = pygame.Surface((SCENE_W, SCENE_H), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, min(255, alpha)))
    surface.blit(overlay, (0, top))


def draw_end_overlay(
    surface: pygame.Surface,
    font: pygame.font.Font,
    session: Session,
    top: int,
) -> None:
    ctx = session.day_cycle.context
    if ctx.state is DayState.COMPLETED and not session.day_cycle.sequencing:
        title = "DRONE NO MORE"
    elif ctx.state is DayState.GAME_OVER:
        title = "BACK TO THE GRIND"
    else:
        return
    summary = session.day_cycle.summary()
    draw_fade(surface, top, 170)

    big_font = pygame.font.SysFont("monospace", 32, bold=True)
    centre = SCENE_W // 2
    middle = top + SCENE_H // 2
    text = big_font.render(title, True, (255, 255, 255))
    surface.blit(text, text.get_rect(center=(centre, middle - 40)))
    lines = (
        f"Days on the train: {summary['days']}",
        f"Changes found: {summary['changes_found']}",
        f"Changes missed: {summary['changes_missed']}",
        "R to ride again",
    )
    for i, line in enumerate(lines):
        rendered = font.render(line, True, COLOR_TEXT)
        surface.blit(rendered, rendered.get_rect(center=(centre, middle + i * 18)))
