"""Tests for the narrative catalogue and the change log."""

import random

from drone import Entity, EntityKind

from drone_change import ChangeAction, PendingChange
from drone_commute import ChangeLog
from drone_commute import narrative


def _change(action=ChangeAction.MUTATE, kind=EntityKind.COMMUTER, frm="x", to="y", day=5):
    if action is ChangeAction.ADD:
        frm = to = None
    return PendingChange("e-0", kind, action, day=day, from_variation=frm, to_variation=to)


def test_tiers():
    assert [narrative.tier(level) for level in (1, 2, 3, 4, 5, 7, 8, 10)] == [
        "early", "early", "mid", "mid", "late", "late", "final", "final",
    ]


def test_day_text_sources():
    rng = random.Random(0)
    assert narrative.day_text(1, 1, rng) == ("everyday the same...", "day")
    assert narrative.day_text(5, 1, rng) == (narrative.SONG_LYRICS[5], "lyric")
    text, source = narrative.day_text(6, 8, rng)
    assert source == "thought"
    assert text in narrative.DAY_THOUGHTS["final"]


def test_level_up_text_follows_tier():
    assert narrative.level_up_text(5, random.Random(1)) in narrative.LEVEL_UP_NARRATIVES["late"]


class TestChangeMessage:
    def test_known_pair(self):
        change = _change(frm="caution.png", to="caution_a.png", kind=EntityKind.SET_DRESSING)
        assert narrative.change_message(change) == narrative.CHANGE_MESSAGES[("caution.png", "caution_a.png")]

    def test_generic_fallbacks(self):
        assert narrative.change_message(_change()) == narrative.COMMUTER_CHANGE_TEXT
        assert narrative.change_message(_change(kind=EntityKind.SET_DRESSING)) == narrative.PLATFORM_CHANGE_TEXT

    def test_new_prop(self):
        prop = Entity("set-dressing-3", EntityKind.SET_DRESSING, "bench", "bench.png", ("bench.png",), 3)
        change = _change(action=ChangeAction.ADD, kind=EntityKind.SET_DRESSING)
        assert narrative.change_message(change, prop) == narrative.NEW_PROP_MESSAGES["bench"]
        assert narrative.change_message(change) == narrative.PLATFORM_CHANGE_TEXT


def test_hint_quadrants():
    assert narrative.hint_text((11, 23)) == "Look for a change in the bottom left area"
    assert narrative.hint_text((88, 70)) == "Look for a change in the top right area"


class TestChangeLog:
    def test_bounded(self):
        log = ChangeLog(max_entries=3)
        for day in range(5, 10):
            log.record(_change(day=day))
        assert len(log) == 3
        assert [c.day for c in log.query()] == [7, 8, 9]

    def test_query_and_snapshot(self):
        log = ChangeLog()
        found = _change(day=5)
        found.mark_found()
        missed = _change(day=6)
        missed.mark_missed()
        log.record(found)
        log.record(missed)
        assert log.query(found=True) == [found]
        assert log.query(day_after=5) == [missed]
        assert log.last() is missed

        other = ChangeLog()
        other.restore(log.snapshot())
        assert other.query() == [found, missed]
