"""drone-awareness - XP, levels, and level-up sequencing."""
from __future__ import annotations

from drone_awareness.config import AwarenessConfig
from drone_awareness.sequencer import (
    ANNOUNCE, FILL, LEVEL_UP_PHASES, REVEAL, LevelUpSequencer,
)
from drone_awareness.tracker import AwarenessTracker, LevelUp

__all__ = [
    "AwarenessConfig",
    "AwarenessTracker",
    "LevelUp",
    "LevelUpSequencer",
    "LEVEL_UP_PHASES",
    "FILL",
    "ANNOUNCE",
    "REVEAL",
]
