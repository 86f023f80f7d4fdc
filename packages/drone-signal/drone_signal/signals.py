"""Signal names published on the EffectsBus, with their payload keys."""
from __future__ import annotations

CHANGE_CREATED = "change_created"  # entity_id, kind, action, day
CHANGE_FOUND = "change_found"  # entity_id
CHANGE_MISSED = "change_missed"  # entity_id
WRONG_CLICK = "wrong_click"  # entity_id, message
ENTITY_ADDED = "entity_added"  # entity_id, kind, type
DAY_STARTED = "day_started"  # day
XP_CHANGED = "xp_changed"  # delta, level, xp
LEVEL_UP = "level_up"  # previous, new
LEVEL_UP_PHASE = "level_up_phase"  # phase, previous, new
NARRATIVE = "narrative"  # text, source
GAME_COMPLETE = "game_complete"  # days, changes_found
GAME_OVER = "game_over"  # days, changes_found, reason

ALL = (
    CHANGE_CREATED, CHANGE_FOUND, CHANGE_MISSED, WRONG_CLICK, ENTITY_ADDED,
    DAY_STARTED, XP_CHANGED, LEVEL_UP, LEVEL_UP_PHASE, NARRATIVE,
    GAME_COMPLETE, GAME_OVER,
)
