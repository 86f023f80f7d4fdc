"""System factory for once-per-step signal dispatch."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from drone_signal.bus import EffectsBus

if TYPE_CHECKING:
    from drone import Engine, StepContext


def make_flush_system(bus: EffectsBus) -> Callable[[Engine, StepContext], None]:
    def flush_system(engine: Engine, ctx: StepContext) -> None:
        bus.flush()

    return flush_system
