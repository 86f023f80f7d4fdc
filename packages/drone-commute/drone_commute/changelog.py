from __future__ import annotations

from collections import deque
from typing import Any

from drone_change import PendingChange


class ChangeLog:
    """Bounded history of resolved changes, oldest first."""

    def __init__(self, max_entries: int = 0) -> None:
        self._max = max_entries
        maxlen = max_entries if max_entries > 0 else None
        self._changes: deque[PendingChange] = deque(maxlen=maxlen)

    def record(self, change: PendingChange) -> None:
        self._changes.append(change)

    def query(self, found: bool | None = None, day_after: int | None = None) -> list[PendingChange]:
        result = list(self._changes)
        if found is not None:
            result = [c for c in result if c.found == found]
        if day_after is not None:
            result = [c for c in result if c.day > day_after]
        return result

    def last(self) -> PendingChange | None:
        return self._changes[-1] if self._changes else None

    def clear(self) -> None:
        self._changes.clear()

    def snapshot(self) -> list[dict[str, Any]]:
        return [c.to_dict() for c in self._changes]

    def restore(self, data: list[dict[str, Any]]) -> None:
        self._changes.clear()
        for d in data:
            self._changes.append(PendingChange.from_dict(d))

    def __len__(self) -> int:
        return len(self._changes)
