"""Tests for save parsing, the stores, and save/restore through a session."""

import json
import logging

import pytest

from drone import CorruptStateError, EntityKind

from drone_awareness import AwarenessConfig
from drone_commute import (
    DayState, JsonFileStore, MemoryStore, SaveState, build_session, parse_save,
)


class TestParseSave:
    def test_none_is_fresh_start(self):
        assert parse_save(None) == SaveState()

    def test_valid_blob(self):
        blob = {"day": 12, "level": 3, "xp": 40, "changes_found": 6}
        assert parse_save(blob) == SaveState(day=12, level=3, xp=40, changes_found=6)

    def test_non_mapping_raises(self):
        with pytest.raises(CorruptStateError):
            parse_save([1, 2, 3])

    def test_bad_fields_fall_back_one_by_one(self, caplog):
        with caplog.at_level(logging.WARNING, logger="drone_commute.persistence"):
            state = parse_save({"day": "twelve", "level": 2, "xp": 30, "changes_found": -4})
        assert state == SaveState(day=1, level=2, xp=30, changes_found=0)
        assert "day" in caplog.text

    def test_level_and_xp_kept_only_together(self):
        # xp 200 is beyond level 2's requirement of 150
        state = parse_save({"day": 9, "level": 2, "xp": 200})
        assert state == SaveState(day=9, level=1, xp=0)

    def test_bad_level_drops_xp(self):
        state = parse_save({"level": "high", "xp": 50})
        assert (state.level, state.xp) == (1, 0)

    def test_bools_are_not_numbers(self):
        state = parse_save({"day": True, "level": 1, "xp": 0})
        assert state.day == 1

    def test_max_level_pair(self):
        config = AwarenessConfig()
        assert parse_save({"level": 10, "xp": 0}, config).level == 10
        assert parse_save({"level": 10, "xp": 5}, config).level == 1
        assert parse_save({"level": 11, "xp": 0}, config).level == 1

    def test_missing_fields_default(self):
        assert parse_save({}) == SaveState()


class TestJsonFileStore:
    def test_missing_file_loads_none(self, tmp_path):
        assert JsonFileStore(tmp_path / "save.json").load() is None

    def test_save_then_load(self, tmp_path):
        store = JsonFileStore(tmp_path / "nested" / "save.json")
        store.save(SaveState(day=3).to_dict())
        assert store.load()["day"] == 3
        assert not (tmp_path / "nested" / "save.json.tmp").exists()

    def test_garbage_raises_corrupt(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(CorruptStateError):
            JsonFileStore(path).load()

    def test_undecodable_bytes_raise_corrupt(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_bytes(b"{\"day\": 3, \"level\": \xff\xfe}")
        with pytest.raises(CorruptStateError):
            JsonFileStore(path).load()


class _FailingStore:
    def load(self):
        return None

    def save(self, data):
        raise OSError("disk full")


class TestSessionSaves:
    def test_restores_progress_and_grows_platform(self):
        store = MemoryStore({"day": 7, "level": 3, "xp": 20, "changes_found": 4})
        session = build_session(seed=1, store=store)
        ctx = session.day_cycle.context
        assert ctx.day == 7
        assert ctx.changes_found == 4
        assert (session.tracker.level, session.tracker.xp) == (3, 20)
        assert session.registry.count(EntityKind.COMMUTER) == 3

    def test_day_advance_saves(self):
        store = MemoryStore()
        session = build_session(seed=1, store=store)
        session.day_cycle.take_train()
        session.engine.run_until_idle()
        assert store.data["day"] == 2
        assert store.data["version"] == 1

    def test_corrupt_file_starts_fresh(self, tmp_path, caplog):
        path = tmp_path / "save.json"
        path.write_text("not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="drone_commute.daycycle"):
            session = build_session(seed=1, store=JsonFileStore(path))
        assert session.day_cycle.context.day == 1
        assert "corrupt" in caplog.text

    def test_undecodable_file_starts_fresh(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_bytes(b"{\"day\": 3, \"level\": \xff\xfe}")
        session = build_session(seed=1, store=JsonFileStore(path))
        assert session.day_cycle.context.day == 1
        assert session.tracker.level == 1

    def test_non_mapping_blob_starts_fresh(self):
        session = build_session(seed=1, store=MemoryStore(["day", 9]))
        assert session.day_cycle.context.day == 1
        assert session.tracker.level == 1

    def test_saved_max_level_is_completed(self):
        session = build_session(seed=1, store=MemoryStore({"day": 40, "level": 10, "xp": 0}))
        assert session.day_cycle.context.state is DayState.COMPLETED
        assert not session.day_cycle.take_train()

    def test_write_errors_are_logged(self, caplog):
        session = build_session(seed=1, store=_FailingStore())
        with caplog.at_level(logging.WARNING, logger="drone_commute.daycycle"):
            assert session.day_cycle.take_train()
            session.engine.run_until_idle()
        assert session.day_cycle.context.day == 2
        assert "Could not write save" in caplog.text


class TestSnapshot:
    def _session_on_day_four(self):
        session = build_session(seed=5, step_ms=10)
        cycle = session.day_cycle
        while cycle.context.day < 4:
            cycle.take_train()
            session.engine.run_until_idle()
        return session

    def test_round_trip_through_json(self):
        session = self._session_on_day_four()
        data = json.loads(json.dumps(session.snapshot()))
        cycle = session.day_cycle
        cycle.click("commuter-0")
        assert session.tracker.xp == 50

        session.restore(data)
        assert session.tracker.xp == 0
        assert cycle.context.day == 4
        assert cycle.context.can_click
        assert not cycle.pending.found
        assert session.registry.get("commuter-0").current_variation == "commuter1_a.png"
        assert cycle.click("commuter-0").value == "correct"

    def test_restore_mid_transition_comes_back_idle(self):
        session = self._session_on_day_four()
        session.day_cycle.take_train()
        data = session.snapshot()
        session.restore(data)
        cycle = session.day_cycle
        assert cycle.context.state is DayState.IDLE
        assert not cycle.context.can_click
        session.engine.run_until_idle()
        assert cycle.context.day == 4

    def test_rng_continues_identically(self):
        a = self._session_on_day_four()
        data = json.loads(json.dumps(a.snapshot()))
        b = build_session(seed=99, step_ms=10)
        b.restore(data)
        assert a.engine.random.random() == b.engine.random.random()

    def test_restore_rejects_foreign_snapshot(self):
        session = build_session(seed=1)
        with pytest.raises(CorruptStateError):
            session.restore(session.engine.snapshot())

    def test_rejected_restore_keeps_live_state(self):
        session = self._session_on_day_four()
        cycle = session.day_cycle
        before = session.snapshot()
        with pytest.raises(CorruptStateError):
            cycle.restore({"registry": {"entities": []}})
        assert session.snapshot() == before
        assert session.registry.count(EntityKind.COMMUTER) == 1
        assert cycle.hint() is not None

    def test_restore_rejects_pending_without_its_entity(self):
        session = self._session_on_day_four()
        data = session.day_cycle.snapshot()
        data["registry"] = {"entities": []}
        with pytest.raises(CorruptStateError):
            session.day_cycle.restore(data)
        assert session.registry.has(session.day_cycle.pending.target_id)

    def test_rejected_session_restore_keeps_clock_and_rng(self):
        session = self._session_on_day_four()
        data = json.loads(json.dumps(session.snapshot()))
        data["now_ms"] = 0
        del data["commute"]["awareness"]
        before = session.snapshot()
        with pytest.raises(CorruptStateError):
            session.restore(data)
        assert session.snapshot() == before
