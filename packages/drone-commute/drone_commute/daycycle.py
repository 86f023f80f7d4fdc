"""DayCycle - orchestrates the daily commute.

One call to ``take_train`` resolves today's change (found or missed),
fades out, advances the day, asks the selector for the new day's change,
fades back in and reopens the controls. Every deferred step runs in the
``day`` scheduler scope so ``reset`` can drop them all at once.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from drone import (
    CorruptStateError,
    Engine,
    Entity,
    EntityKind,
    EntityRegistry,
    InvalidVariationError,
    UnknownEntityError,
)
from drone_awareness import REVEAL, AwarenessTracker, LevelUp, LevelUpSequencer
from drone_change import (
    TUTORIAL_DAY,
    ChangeSelector,
    ChangeVerifier,
    Outcome,
    PendingChange,
    PoolSchedule,
)
from drone_signal import EffectsBus, signals

from drone_commute import narrative
from drone_commute.changelog import ChangeLog
from drone_commute.config import GameConfig, WrongClickPolicy
from drone_commute.context import DayState, SessionContext
from drone_commute.persistence import SaveState, SaveStore, parse_save
from drone_commute.renderer import NullRenderer, Renderer

logger = logging.getLogger(__name__)

DAY_SCOPE = "day"


@dataclass(frozen=True)
class CycleSnapshot:
    """A day-cycle snapshot that passed ``DayCycle.check_snapshot``."""
    registry: dict[str, Any]
    level: int
    xp: int
    context: dict[str, Any]
    changes: list[dict[str, Any]]


class DayCycle:
    def __init__(
        self,
        engine: Engine,
        bus: EffectsBus,
        config: GameConfig,
        registry: EntityRegistry,
        selector: ChangeSelector,
        tracker: AwarenessTracker,
        *,
        verifier: ChangeVerifier | None = None,
        changelog: ChangeLog | None = None,
        renderer: Renderer | None = None,
        schedule: PoolSchedule | None = None,
        store: SaveStore | None = None,
        context: SessionContext | None = None,
    ) -> None:
        self._engine = engine
        self._bus = bus
        self._config = config
        self._registry = registry
        self._selector = selector
        self._tracker = tracker
        self._verifier = verifier or ChangeVerifier()
        self._changelog = changelog if changelog is not None else ChangeLog()
        self._renderer = renderer or NullRenderer()
        self._schedule = schedule or config.make_pool_schedule()
        self._store = store
        self._ctx = context or SessionContext()
        self._hint_ready_ms = 0
        self._sequencer = LevelUpSequencer(
            engine.scheduler,
            on_phase=self._on_level_up_phase,
            on_done=self._on_level_up_done,
        )
        registry.on_add(self._on_entity_added)
        registry.on_change(self._on_variation_changed)

    # -- Read access --

    @property
    def context(self) -> SessionContext:
        return self._ctx

    @property
    def tracker(self) -> AwarenessTracker:
        return self._tracker

    @property
    def registry(self) -> EntityRegistry:
        return self._registry

    @property
    def changelog(self) -> ChangeLog:
        return self._changelog

    @property
    def sequencing(self) -> bool:
        """True while a level-up presentation is in flight."""
        return self._sequencer.busy

    @property
    def pending(self) -> PendingChange | None:
        return self._ctx.pending

    def position_of(self, entity: Entity) -> tuple[int, int]:
        return self._config.positions(entity.kind)[entity.index]

    # -- Lifecycle --

    def start(self) -> None:
        """Populate the opening scene and apply any saved progress."""
        self._populate()
        if self._store is not None:
            self._apply_save(self._load_save())
        self._announce_day()

    def reset(self) -> None:
        """Drop every deferred step and start over from day one."""
        cancelled = self._engine.scheduler.cancel_scope(DAY_SCOPE)
        self._sequencer.cancel()
        logger.debug("Reset cancelled %d deferred day steps", cancelled)
        self._bus.clear()
        self._registry.clear()
        self._tracker.reset()
        self._changelog.clear()
        self._ctx.reset()
        self._hint_ready_ms = 0
        self._populate()
        self._announce_day()
        self._save()

    def _populate(self) -> None:
        if self._registry.count(EntityKind.COMMUTER) == 0:
            self._selector.add_entity(EntityKind.COMMUTER)
        while self._registry.count(EntityKind.SET_DRESSING) < self._config.initial_set_dressing:
            if self._selector.add_entity(EntityKind.SET_DRESSING) is None:
                break

    # -- Player actions --

    def take_train(self) -> bool:
        """Leave for the next day. Returns False when the train is not available."""
        ctx = self._ctx
        if ctx.state is not DayState.IDLE or self._sequencer.busy:
            return False

        pending = ctx.pending
        ctx.can_click = False
        if pending is not None and not pending.found:
            self._miss(pending)
            ctx.state = DayState.TRANSITIONING
            self._engine.scheduler.call_later(
                self._config.timings.missed_highlight_ms,
                self._begin_transition,
                name="missed-highlight",
                scope=DAY_SCOPE,
            )
            return True

        if ctx.day > TUTORIAL_DAY:
            self._grant(self._config.base_xp_for_taking_train)
            if ctx.finished:
                return True
        ctx.state = DayState.TRANSITIONING
        self._begin_transition()
        return True

    def click(self, entity_id: str) -> Outcome | None:
        """Check a clicked entity. Returns None when clicks are not accepted."""
        ctx = self._ctx
        if ctx.is_transitioning or ctx.finished:
            return None
        if not ctx.can_click:
            text = narrative.NOT_YET_TEXT
            if ctx.pending is not None and ctx.pending.found:
                text = narrative.TAKE_THE_TRAIN_TEXT
            self._bus.publish(signals.NARRATIVE, text=text, source="popup")
            return None

        outcome = self._verifier.check(ctx.pending, entity_id)
        if outcome is Outcome.CORRECT:
            ctx.changes_found += 1
            ctx.can_click = False
            self._bus.publish(signals.CHANGE_FOUND, entity_id=entity_id)
            self._grant(self._config.base_xp_for_finding_change)
            self._save()
        elif outcome is Outcome.WRONG_ENTITY:
            self._wrong_click(entity_id)
        return outcome

    def hint(self) -> str | None:
        """Quadrant of today's change. None while the hint is cooling down."""
        pending = self._ctx.pending
        if pending is None:
            text = narrative.NO_CHANGE_HINT
        elif pending.found:
            text = narrative.ALL_FOUND_HINT
        else:
            now = self._engine.clock.now_ms
            if now < self._hint_ready_ms:
                return None
            self._hint_ready_ms = now + self._config.timings.hint_cooldown_ms
            text = narrative.hint_text(self.position_of(self._registry.get(pending.target_id)))
        self._bus.publish(signals.NARRATIVE, text=text, source="hint")
        return text

    def summary(self) -> dict[str, Any]:
        ctx = self._ctx
        return {
            "days": ctx.day,
            "changes_found": ctx.changes_found,
            "changes_missed": ctx.changes_missed,
            "level": self._tracker.level,
            "xp": self._tracker.xp,
            "state": ctx.state.value,
            "game_over_reason": ctx.game_over_reason,
        }

    # -- Day transition --

    def _miss(self, pending: PendingChange) -> None:
        if pending.mark_missed():
            self._ctx.changes_missed += 1
            self._bus.publish(signals.CHANGE_MISSED, entity_id=pending.target_id)

    def _resolve_pending(self) -> None:
        pending = self._ctx.pending
        if pending is not None:
            self._changelog.record(pending)
            self._ctx.pending = None

    def _begin_transition(self) -> None:
        self._resolve_pending()
        self._engine.scheduler.call_later(
            self._config.timings.fade_out_ms,
            self._advance_day,
            name="fade-out",
            scope=DAY_SCOPE,
        )

    def _advance_day(self) -> None:
        ctx = self._ctx
        ctx.day += 1
        change = self._select_change(ctx.day)
        ctx.pending = change
        ctx.can_click = change is not None
        if change is not None:
            self._bus.publish(
                signals.CHANGE_CREATED,
                entity_id=change.target_id,
                kind=change.kind.value,
                action=change.action.value,
                day=change.day,
            )
        self._announce_day()
        self._save()
        self._engine.scheduler.call_later(
            self._config.timings.fade_in_ms,
            self._finish_transition,
            name="fade-in",
            scope=DAY_SCOPE,
        )

    def _finish_transition(self) -> None:
        if self._ctx.state is DayState.TRANSITIONING:
            self._ctx.state = DayState.IDLE

    def _select_change(self, day: int) -> PendingChange | None:
        try:
            if day == TUTORIAL_DAY:
                return self._selector.first_change(day)
            if day > TUTORIAL_DAY:
                kind = self._schedule(day, self._engine.random)
                return self._selector.random_change(kind, day)
        except (UnknownEntityError, InvalidVariationError):
            logger.exception("Day %d: change selection failed, no change today", day)
        return None

    def _announce_day(self) -> None:
        day = self._ctx.day
        text, source = narrative.day_text(day, self._tracker.level, self._engine.random)
        self._bus.publish(signals.DAY_STARTED, day=day)
        self._bus.publish(signals.NARRATIVE, text=text, source=source)

    # -- Clicks --

    def _wrong_click(self, entity_id: str) -> None:
        ctx = self._ctx
        pending = ctx.pending
        if self._config.wrong_click_policy is WrongClickPolicy.RETRY:
            self._bus.publish(
                signals.WRONG_CLICK, entity_id=entity_id, message=narrative.UNPLACED_CHANGE_TEXT,
            )
            return

        target = self._registry.get(pending.target_id) if self._registry.has(pending.target_id) else None
        self._bus.publish(
            signals.WRONG_CLICK,
            entity_id=entity_id,
            message=narrative.change_message(pending, target),
        )
        ctx.can_click = False
        ctx.state = DayState.GAME_OVER
        ctx.game_over_reason = "wrong-click"
        self._miss(pending)
        self._resolve_pending()
        self._engine.scheduler.call_later(
            self._config.timings.missed_highlight_ms,
            self._announce_game_over,
            name="game-over",
            scope=DAY_SCOPE,
        )

    def _announce_game_over(self) -> None:
        ctx = self._ctx
        self._bus.publish(
            signals.GAME_OVER,
            days=ctx.day,
            changes_found=ctx.changes_found,
            reason=ctx.game_over_reason,
        )

    # -- Awareness --

    def _grant(self, raw: int) -> list[LevelUp]:
        events = self._tracker.add_xp(raw)
        tracker = self._tracker
        self._bus.publish(
            signals.XP_CHANGED, delta=tracker.last_gain, level=tracker.level, xp=tracker.xp,
        )
        for event in events:
            self._bus.publish(signals.LEVEL_UP, previous=event.previous, new=event.new)
        if tracker.is_max and not self._ctx.finished:
            self._ctx.state = DayState.COMPLETED
            self._ctx.can_click = False
        self._sequencer.push(events)
        return events

    def _on_level_up_phase(self, phase: str, event: LevelUp) -> None:
        self._bus.publish(
            signals.LEVEL_UP_PHASE, phase=phase, previous=event.previous, new=event.new,
        )
        if phase == REVEAL:
            self._selector.add_entity(EntityKind.COMMUTER)
            self._bus.publish(
                signals.NARRATIVE,
                text=narrative.level_up_text(event.new, self._engine.random),
                source="level-up",
            )

    def _on_level_up_done(self, event: LevelUp) -> None:
        if event.new >= self._tracker.config.max_level:
            ctx = self._ctx
            self._bus.publish(
                signals.GAME_COMPLETE, days=ctx.day, changes_found=ctx.changes_found,
            )

    # -- Registry hooks --

    def _on_entity_added(self, entity: Entity) -> None:
        self._renderer.render(entity)
        self._bus.publish(
            signals.ENTITY_ADDED, entity_id=entity.id, kind=entity.kind.value, type=entity.type,
        )

    def _on_variation_changed(self, entity: Entity, previous: str) -> None:
        self._renderer.update_variation(entity.id, entity.current_variation)

    # -- Persistence --

    def save_state(self) -> SaveState:
        return SaveState(
            day=self._ctx.day,
            level=self._tracker.level,
            xp=self._tracker.xp,
            changes_found=self._ctx.changes_found,
        )

    def snapshot(self) -> dict[str, Any]:
        return {
            "context": self._ctx.snapshot(),
            "awareness": self._tracker.snapshot(),
            "registry": self._registry.snapshot(),
            "changes": self._changelog.snapshot(),
        }

    def check_snapshot(self, data: dict[str, Any]) -> CycleSnapshot:
        """Validate a ``snapshot()`` without touching live state.

        Raises CorruptStateError if any section is malformed or the pending
        change points at an entity the snapshot does not contain.
        """
        try:
            registry = self._registry.empty_copy()
            registry.restore(data.get("registry", {}))
            awareness = data["awareness"]
            level, xp = int(awareness["level"]), int(awareness["xp"])
            AwarenessTracker(self._tracker.config).restore(level, xp)
            context = SessionContext()
            context.restore(data["context"])
            changes = ChangeLog()
            changes.restore(data.get("changes", []))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise CorruptStateError(f"Malformed day-cycle snapshot: {exc}") from exc
        pending = context.pending
        if pending is not None and not registry.has(pending.target_id):
            raise CorruptStateError(
                f"Pending change targets unknown entity {pending.target_id!r}"
            )
        return CycleSnapshot(
            registry=registry.snapshot(),
            level=level,
            xp=xp,
            context=context.snapshot(),
            changes=changes.snapshot(),
        )

    def restore(self, data: dict[str, Any]) -> None:
        """Restore a ``snapshot()``. Nothing changes if it is rejected."""
        self.apply_snapshot(self.check_snapshot(data))

    def apply_snapshot(self, snap: CycleSnapshot) -> None:
        """Replace live state with a checked snapshot.

        In-flight transitions and level-ups are dropped. A snapshot taken
        mid-transition comes back idle on the day it was taken, with
        clicking open only if its change is still unfound.
        """
        self._engine.scheduler.cancel_scope(DAY_SCOPE)
        self._sequencer.cancel()
        self._registry.restore(snap.registry)
        self._tracker.restore(snap.level, snap.xp)
        self._ctx.restore(snap.context)
        self._changelog.restore(snap.changes)

        ctx = self._ctx
        if ctx.is_transitioning:
            ctx.state = DayState.IDLE
        pending = ctx.pending
        ctx.can_click = (
            ctx.state is DayState.IDLE
            and pending is not None
            and not pending.resolved
        )
        self._hint_ready_ms = 0

    def _load_save(self) -> SaveState:
        try:
            blob = self._store.load()
            return parse_save(blob, self._tracker.config)
        except CorruptStateError:
            logger.warning("Discarding corrupt save", exc_info=True)
        except OSError:
            logger.warning("Could not read save", exc_info=True)
        return SaveState()

    def _apply_save(self, state: SaveState) -> None:
        """Restore progress and grow the platform to match the level."""
        self._ctx.day = state.day
        self._ctx.changes_found = state.changes_found
        self._tracker.restore(state.level, state.xp)
        if self._tracker.is_max:
            self._ctx.state = DayState.COMPLETED
        while self._registry.count(EntityKind.COMMUTER) < state.level:
            if self._selector.add_entity(EntityKind.COMMUTER) is None:
                break

    def _save(self) -> None:
        if self._store is None:
            return
        try:
            self._store.save(self.save_state().to_dict())
        except OSError:
            logger.warning("Could not write save", exc_info=True)
