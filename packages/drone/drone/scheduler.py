"""Scheduler - deferred callbacks with cancellable handles and scopes."""
from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class Deferred:
    """One scheduled callback. Fires once at ``due_ms`` unless cancelled."""

    name: str
    due_ms: int
    scope: str | None
    callback: Callable[[], None] = field(repr=False)
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class Scheduler:
    """Fires deferred callbacks in due-time order as time advances.

    Ties on ``due_ms`` fire in scheduling order. A callback scheduled from
    inside another callback is timed from the firing callback's due time,
    so chained delays do not drift with step granularity.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, Deferred]] = []
        self._seq = 0
        self._now_ms = 0

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def call_later(
        self,
        delay_ms: int,
        callback: Callable[[], None],
        *,
        name: str = "",
        scope: str | None = None,
    ) -> Deferred:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        deferred = Deferred(
            name=name or getattr(callback, "__name__", "deferred"),
            due_ms=self._now_ms + delay_ms,
            scope=scope,
            callback=callback,
        )
        heapq.heappush(self._heap, (deferred.due_ms, self._seq, deferred))
        self._seq += 1
        return deferred

    def cancel_scope(self, scope: str) -> int:
        """Cancel every pending callback in *scope*. Returns how many."""
        count = 0
        for _, _, deferred in self._heap:
            if deferred.scope == scope and deferred.active:
                deferred.cancel()
                count += 1
        return count

    def cancel_all(self) -> int:
        count = 0
        for _, _, deferred in self._heap:
            if deferred.active:
                deferred.cancel()
                count += 1
        self._heap.clear()
        return count

    def pending(self, scope: str | None = None) -> int:
        return sum(
            1 for _, _, d in self._heap
            if d.active and (scope is None or d.scope == scope)
        )

    def next_due(self) -> int | None:
        for due, _, d in sorted(self._heap):
            if d.active:
                return due
        return None

    def advance_to(self, now_ms: int) -> int:
        """Fire everything due at or before *now_ms*. Returns fired count."""
        fired = 0
        while self._heap and self._heap[0][0] <= now_ms:
            due, _, deferred = heapq.heappop(self._heap)
            if not deferred.active:
                continue
            self._now_ms = max(self._now_ms, due)
            deferred.fired = True
            deferred.callback()
            fired += 1
        self._now_ms = max(self._now_ms, now_ms)
        return fired

    def reset(self, now_ms: int = 0) -> None:
        self.cancel_all()
        self._now_ms = now_ms
