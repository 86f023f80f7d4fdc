"""drone-commute - the daily commute game loop built on the drone packages."""
from __future__ import annotations

from drone_commute.changelog import ChangeLog
from drone_commute.config import (
    GameConfig, Timings, WrongClickPolicy, load_config, validate_config,
)
from drone_commute.context import DayState, SessionContext
from drone_commute.daycycle import DAY_SCOPE, CycleSnapshot, DayCycle
from drone_commute.persistence import (
    JsonFileStore, MemoryStore, SaveState, SaveStore, parse_save,
)
from drone_commute.renderer import NullRenderer, Renderer
from drone_commute.session import Session, build_session

__all__ = [
    "GameConfig",
    "Timings",
    "WrongClickPolicy",
    "load_config",
    "validate_config",
    "SessionContext",
    "DayState",
    "CycleSnapshot",
    "DayCycle",
    "DAY_SCOPE",
    "ChangeLog",
    "SaveState",
    "SaveStore",
    "JsonFileStore",
    "MemoryStore",
    "parse_save",
    "Renderer",
    "NullRenderer",
    "Session",
    "build_session",
]
