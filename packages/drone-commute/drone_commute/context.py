"""SessionContext - the mutable state of one play session."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from drone_change import PendingChange


class DayState(Enum):
    IDLE = "idle"
    TRANSITIONING = "transitioning"
    COMPLETED = "completed"
    GAME_OVER = "game-over"


@dataclass
class SessionContext:
    day: int = 1
    state: DayState = DayState.IDLE
    can_click: bool = False
    pending: PendingChange | None = None
    changes_found: int = 0
    changes_missed: int = 0
    game_over_reason: str | None = None

    @property
    def is_transitioning(self) -> bool:
        return self.state is DayState.TRANSITIONING

    @property
    def finished(self) -> bool:
        return self.state in (DayState.COMPLETED, DayState.GAME_OVER)

    def reset(self) -> None:
        self.day = 1
        self.state = DayState.IDLE
        self.can_click = False
        self.pending = None
        self.changes_found = 0
        self.changes_missed = 0
        self.game_over_reason = None

    def snapshot(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "state": self.state.value,
            "can_click": self.can_click,
            "pending": self.pending.to_dict() if self.pending is not None else None,
            "changes_found": self.changes_found,
            "changes_missed": self.changes_missed,
            "game_over_reason": self.game_over_reason,
        }

    def restore(self, data: dict[str, Any]) -> None:
        pending = data.get("pending")
        self.day = int(data["day"])
        self.state = DayState(data["state"])
        self.can_click = bool(data.get("can_click", False))
        self.pending = PendingChange.from_dict(pending) if pending else None
        self.changes_found = int(data.get("changes_found", 0))
        self.changes_missed = int(data.get("changes_missed", 0))
        self.game_over_reason = data.get("game_over_reason")
