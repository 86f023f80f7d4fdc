"""LevelUpSequencer - one level-up presentation at a time."""
from __future__ import annotations

from typing import Callable, Iterable

from drone import PhaseQueue, Scheduler

from drone_awareness.tracker import LevelUp

FILL = "fill"
ANNOUNCE = "announce"
REVEAL = "reveal"

LEVEL_UP_PHASES: tuple[tuple[str, int], ...] = (
    (FILL, 800),
    (ANNOUNCE, 1000),
    (REVEAL, 2000),
)


class LevelUpSequencer:
    """Runs FillBar -> Announce -> Reveal -> NotifyCaller for each LevelUp.

    Queued events are presented strictly one after another. ``on_phase``
    receives ``(phase_name, event)`` as each phase begins; ``on_done``
    receives the event once its last phase has elapsed.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_phase: Callable[[str, LevelUp], None] | None = None,
        on_done: Callable[[LevelUp], None] | None = None,
        phases: Iterable[tuple[str, int]] = LEVEL_UP_PHASES,
    ) -> None:
        self._queue = PhaseQueue(
            scheduler, phases, on_phase=on_phase, on_done=on_done, scope="level-up",
        )

    @property
    def busy(self) -> bool:
        return self._queue.busy

    @property
    def current_phase(self) -> str | None:
        return self._queue.current_phase

    def pending(self) -> int:
        return self._queue.pending()

    def push(self, events: Iterable[LevelUp]) -> None:
        for event in events:
            self._queue.push(event)

    def cancel(self) -> None:
        self._queue.cancel()
