"""Engine - clock, deferred scheduling, seeded randomness, and step systems."""

import os
import random
from typing import Any

from drone.clock import Clock
from drone.scheduler import Scheduler
from drone.types import CorruptStateError, System

_SNAPSHOT_VERSION = 1


class Engine:
    def __init__(self, step_ms: int = 16, seed: int | None = None) -> None:
        self._clock = Clock(step_ms)
        self._scheduler = Scheduler()
        self._systems: list[System] = []

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def random(self) -> random.Random:
        return self._rng

    @property
    def seed(self) -> int:
        return self._seed

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def step(self, dt_ms: int | None = None) -> None:
        now = self._clock.advance(dt_ms)
        self._scheduler.advance_to(now)
        ctx = self._clock.context(self._rng)
        for system in self._systems:
            system(self, ctx)

    def advance(self, ms: int) -> int:
        """Step in ``step_ms`` increments until *ms* have elapsed. Returns steps."""
        steps = 0
        remaining = ms
        step_ms = self._clock.step_ms
        while remaining > 0:
            dt = min(step_ms, remaining)
            self.step(dt)
            remaining -= dt
            steps += 1
        return steps

    def run_until_idle(self, limit_ms: int = 60_000) -> int:
        """Jump from one due callback to the next until nothing is pending.

        Returns the elapsed milliseconds. Stops at *limit_ms* so a callback
        that keeps rescheduling itself cannot spin forever.
        """
        start = self._clock.now_ms
        while True:
            due = self._scheduler.next_due()
            if due is None or due - start > limit_ms:
                break
            self.step(max(0, due - self._clock.now_ms))
        return self._clock.now_ms - start

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "now_ms": self._clock.now_ms,
            "step_number": self._clock.step_number,
            "seed": self._seed,
            "rng_state": _serialize_rng_state(self._rng.getstate()),
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Restore clock and RNG. Pending deferred callbacks are dropped."""
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise CorruptStateError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )
        try:
            now_ms = int(data["now_ms"])
            step_number = int(data["step_number"])
            seed = int(data["seed"])
            self._rng.setstate(_deserialize_rng_state(data["rng_state"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise CorruptStateError(f"Malformed engine snapshot: {exc}") from exc

        self._clock.reset(now_ms, step_number)
        self._scheduler.reset(now_ms)
        self._seed = seed


def _serialize_rng_state(state: tuple[int, tuple[int, ...], float | None]) -> list[Any]:
    """Convert Random.getstate() tuple to JSON-compatible list.

    The state format (version, internalstate, gauss_next) is the
    CPython Mersenne Twister representation. Stable across CPython
    versions but may differ on other implementations (PyPy, etc.).
    """
    version, internalstate, gauss_next = state
    return [version, list(internalstate), gauss_next]


def _deserialize_rng_state(data: list[Any]) -> tuple[int, tuple[int, ...], float | None]:
    """Convert JSON list back to Random.setstate() tuple."""
    version, internalstate, gauss_next = data
    return (version, tuple(internalstate), gauss_next)
