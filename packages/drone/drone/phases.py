"""PhaseQueue - strictly sequential jobs walked through named, timed phases."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from drone.scheduler import Scheduler


@dataclass(frozen=True)
class Phase:
    name: str
    duration_ms: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Phase name must be non-empty")
        if self.duration_ms < 0:
            raise ValueError(f"duration_ms must be >= 0, got {self.duration_ms}")


class PhaseQueue:
    """FIFO of jobs; each job runs every phase in order before the next starts.

    ``on_phase(phase_name, job)`` is called when a phase begins. After the
    last phase elapses ``on_done(job)`` is called and the next queued job
    starts in the same callback. ``cancel()`` drops the running job and
    everything queued; none of their remaining phases fire.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        phases: Iterable[Phase | tuple[str, int]],
        on_phase: Callable[[str, Any], None] | None = None,
        on_done: Callable[[Any], None] | None = None,
        scope: str = "phases",
    ) -> None:
        self._scheduler = scheduler
        self._phases: tuple[Phase, ...] = tuple(
            p if isinstance(p, Phase) else Phase(*p) for p in phases
        )
        if not self._phases:
            raise ValueError("PhaseQueue requires at least one phase")
        self._on_phase = on_phase
        self._on_done = on_done
        self._scope = scope
        self._queue: deque[Any] = deque()
        self._job: Any = None
        self._phase_index = -1
        self._generation = 0

    @property
    def phases(self) -> tuple[Phase, ...]:
        return self._phases

    @property
    def busy(self) -> bool:
        return self._phase_index >= 0

    @property
    def current_phase(self) -> str | None:
        if self._phase_index < 0:
            return None
        return self._phases[self._phase_index].name

    def pending(self) -> int:
        """Jobs waiting behind the running one."""
        return len(self._queue)

    def push(self, job: Any) -> None:
        self._queue.append(job)
        if not self.busy:
            self._start_next()

    def cancel(self) -> None:
        self._generation += 1
        self._scheduler.cancel_scope(self._scope)
        self._queue.clear()
        self._job = None
        self._phase_index = -1

    def _start_next(self) -> None:
        if not self._queue:
            self._job = None
            self._phase_index = -1
            return
        self._job = self._queue.popleft()
        self._enter(0)

    def _enter(self, index: int) -> None:
        if index >= len(self._phases):
            job = self._job
            self._phase_index = -1
            if self._on_done is not None:
                self._on_done(job)
            # on_done may have cancelled or pushed.
            if not self.busy:
                self._start_next()
            return
        self._phase_index = index
        phase = self._phases[index]
        generation = self._generation
        if self._on_phase is not None:
            self._on_phase(phase.name, self._job)
            if generation != self._generation:
                return
        self._scheduler.call_later(
            phase.duration_ms,
            lambda: self._enter(index + 1),
            name=phase.name,
            scope=self._scope,
        )
