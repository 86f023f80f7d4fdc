"""Bottom panel: the most recent narration and game events, word-wrapped."""
from __future__ import annotations

from collections import deque

import pygame

from ui.constants import COLOR_LOG_BG, LOG_COLORS

Color = tuple[int, int, int]


def wrap(text: str, font: pygame.font.Font, width: int) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and font.size(candidate)[0] > width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines or [""]


class LogPanel:
    def __init__(self, max_entries: int = 60) -> None:
        self.entries: deque[tuple[str, Color]] = deque(maxlen=max_entries)
        self._last: str | None = None

    def add(self, text: str, category: str = "default") -> None:
        # Hints and popups repeat; keep one copy in a row.
        if text == self._last:
            return
        self._last = text
        self.entries.append((text, LOG_COLORS.get(category, LOG_COLORS["default"])))

    def draw(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        x: int, y: int, w: int, h: int,
    ) -> None:
        pygame.draw.rect(surface, COLOR_LOG_BG, (x, y, w, h))
        pygame.draw.line(surface, (50, 50, 60), (x, y), (x + w, y))

        line_h = font.get_linesize()
        rows: list[tuple[str, Color]] = []
        for text, color in self.entries:
            rows.extend((line, color) for line in wrap(text, font, w - 12))
        visible = max(1, (h - 8) // line_h)
        for i, (line, color) in enumerate(rows[-visible:]):
            surface.blit(font.render(line, True, color), (x + 6, y + 4 + i * line_h))
