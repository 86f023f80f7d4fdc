"""Wire a complete play session."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from drone import CorruptStateError, Engine, EntityKind, EntityRegistry
from drone_awareness import AwarenessTracker
from drone_change import ChangeSelector, CommuterTarget, SetDressingTarget
from drone_signal import EffectsBus, make_flush_system

from drone_commute.changelog import ChangeLog
from drone_commute.config import GameConfig, validate_config
from drone_commute.daycycle import DayCycle
from drone_commute.persistence import SaveStore
from drone_commute.renderer import Renderer

_SNAPSHOT_VERSION = 1


@dataclass
class Session:
    """Everything one game needs, already connected."""
    engine: Engine
    bus: EffectsBus
    config: GameConfig
    registry: EntityRegistry
    selector: ChangeSelector
    tracker: AwarenessTracker
    changelog: ChangeLog
    day_cycle: DayCycle

    def step(self, dt_ms: int | None = None) -> None:
        self.engine.step(dt_ms)

    def advance(self, ms: int) -> int:
        return self.engine.advance(ms)

    def snapshot(self) -> dict[str, Any]:
        data = self.engine.snapshot()
        data["commute"] = {"version": _SNAPSHOT_VERSION, **self.day_cycle.snapshot()}
        return data

    def restore(self, data: dict[str, Any]) -> None:
        commute = data.get("commute")
        if not isinstance(commute, dict) or commute.get("version") != _SNAPSHOT_VERSION:
            raise CorruptStateError("Snapshot has no usable commute section")
        checked = self.day_cycle.check_snapshot(commute)
        self.engine.restore(data)
        self.bus.clear()
        self.day_cycle.apply_snapshot(checked)


def build_session(
    config: GameConfig | None = None,
    *,
    seed: int | None = None,
    store: SaveStore | None = None,
    renderer: Renderer | None = None,
    step_ms: int = 16,
    changelog_size: int = 100,
) -> Session:
    """Validate *config*, wire every component and open day one.

    Signals raised while setting up are queued on the bus and go out on
    the first engine step.
    """
    config = config or GameConfig()
    validate_config(config)

    engine = Engine(step_ms=step_ms, seed=seed)
    bus = EffectsBus()
    engine.add_system(make_flush_system(bus))

    registry = EntityRegistry(config.pools(), config.capacities())
    selector = ChangeSelector(
        registry,
        engine.random,
        {
            EntityKind.COMMUTER: CommuterTarget(),
            EntityKind.SET_DRESSING: SetDressingTarget(
                min_population=config.set_dressing_min_population,
                add_probability=config.set_dressing_add_probability,
            ),
        },
    )
    tracker = AwarenessTracker(config.awareness_config())
    changelog = ChangeLog(changelog_size)
    day_cycle = DayCycle(
        engine, bus, config, registry, selector, tracker,
        changelog=changelog, renderer=renderer, store=store,
    )
    day_cycle.start()

    return Session(
        engine=engine,
        bus=bus,
        config=config,
        registry=registry,
        selector=selector,
        tracker=tracker,
        changelog=changelog,
        day_cycle=day_cycle,
    )
