"""Layout, color, and rendering constants."""
from __future__ import annotations

# Layout
SCENE_W = 800
SCENE_H = 420
HUD_H = 70
LOG_H = 90
SCREEN_W = SCENE_W
SCREEN_H = HUD_H + SCENE_H + LOG_H
FPS = 60

# Entity blocks
COMMUTER_SIZE = (46, 110)
PROP_SIZE = (40, 34)

# Scene colors
COLOR_SKY = (52, 54, 66)
COLOR_PLATFORM = (88, 84, 78)
COLOR_PLATFORM_EDGE = (233, 203, 95)
COLOR_OUTLINE = (20, 20, 24)
COLOR_HIGHLIGHT = (233, 203, 95)

# Base colors per entity type; the "_a" variation is drawn lighter.
TYPE_COLORS: dict[str, tuple[int, int, int]] = {
    "commuter1": (78, 57, 46),
    "commuter2": (59, 46, 38),
    "commuter3": (84, 64, 51),
    "commuter4": (74, 54, 41),
    "commuter5": (46, 46, 64),
    "commuter6": (53, 43, 43),
    "commuter7": (77, 63, 52),
    "commuter8": (88, 71, 58),
    "bench": (110, 80, 50),
    "bottle": (60, 120, 70),
    "caution": (220, 190, 40),
    "trash": (120, 120, 110),
    "trashcan": (70, 90, 90),
}

# UI colors
COLOR_BG = (20, 20, 30)
COLOR_HUD_BG = (25, 25, 35)
COLOR_LOG_BG = (18, 18, 25)
COLOR_TEXT = (212, 212, 200)
COLOR_TEXT_DIM = (130, 130, 140)
COLOR_BAR_BG = (40, 40, 50)
COLOR_BAR_FILL = (233, 203, 95)

# Event log colors
LOG_COLORS: dict[str, tuple[int, int, int]] = {
    "found": (100, 220, 100),
    "missed": (220, 160, 60),
    "wrong": (220, 60, 60),
    "level": (180, 120, 255),
    "narrative": (200, 200, 170),
    "day": (130, 130, 140),
    "end": (255, 255, 255),
    "default": (170, 170, 170),
}
