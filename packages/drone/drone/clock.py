"""Clock and StepContext for the millisecond-driven engine."""

import random

from drone.types import StepContext


class Clock:
    def __init__(self, step_ms: int) -> None:
        if step_ms <= 0:
            raise ValueError("step_ms must be positive")
        self._step_ms = step_ms
        self._now_ms = 0
        self._step_number = 0
        self._last_dt = 0

    @property
    def step_ms(self) -> int:
        return self._step_ms

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def step_number(self) -> int:
        return self._step_number

    def advance(self, dt_ms: int | None = None) -> int:
        dt = self._step_ms if dt_ms is None else dt_ms
        if dt < 0:
            raise ValueError("dt_ms must be non-negative")
        self._step_number += 1
        self._now_ms += dt
        self._last_dt = dt
        return self._now_ms

    def context(self, rng: random.Random) -> StepContext:
        return StepContext(
            step_number=self._step_number,
            dt_ms=self._last_dt,
            now_ms=self._now_ms,
            random=rng,
        )

    def reset(self, now_ms: int = 0, step_number: int = 0) -> None:
        self._now_ms = now_ms
        self._step_number = step_number
        self._last_dt = 0
