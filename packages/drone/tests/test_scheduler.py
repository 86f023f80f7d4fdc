"""Tests for deferred callbacks, ordering, and cancellation scopes."""

import pytest

from drone.scheduler import Scheduler


def test_callback_fires_when_due():
    sched = Scheduler()
    fired = []
    sched.call_later(100, lambda: fired.append("a"))

    sched.advance_to(99)
    assert fired == []
    sched.advance_to(100)
    assert fired == ["a"]


def test_callback_fires_exactly_once():
    sched = Scheduler()
    fired = []
    sched.call_later(10, lambda: fired.append(1))
    sched.advance_to(10)
    sched.advance_to(50)
    assert fired == [1]


def test_due_order_and_tie_break_by_scheduling_order():
    sched = Scheduler()
    fired = []
    sched.call_later(50, lambda: fired.append("late"))
    sched.call_later(10, lambda: fired.append("first"))
    sched.call_later(10, lambda: fired.append("second"))
    sched.advance_to(100)
    assert fired == ["first", "second", "late"]


def test_chained_callbacks_are_timed_from_parent_due_time():
    sched = Scheduler()
    times = []

    def outer():
        times.append(("outer", sched.now_ms))
        sched.call_later(30, lambda: times.append(("inner", sched.now_ms)))

    sched.call_later(20, outer)
    # One big jump still fires the chained callback at 50.
    sched.advance_to(1000)
    assert times == [("outer", 20), ("inner", 50)]


def test_cancel_handle():
    sched = Scheduler()
    fired = []
    handle = sched.call_later(10, lambda: fired.append(1))
    handle.cancel()
    sched.advance_to(100)
    assert fired == []
    assert not handle.active


def test_cancel_scope_only_touches_that_scope():
    sched = Scheduler()
    fired = []
    sched.call_later(10, lambda: fired.append("day"), scope="day")
    sched.call_later(10, lambda: fired.append("other"), scope="fx")
    sched.call_later(20, lambda: fired.append("day2"), scope="day")

    assert sched.cancel_scope("day") == 2
    sched.advance_to(100)
    assert fired == ["other"]


def test_pending_counts_active_only():
    sched = Scheduler()
    a = sched.call_later(10, lambda: None, scope="x")
    sched.call_later(10, lambda: None)
    a.cancel()
    assert sched.pending() == 1
    assert sched.pending("x") == 0


def test_next_due_skips_cancelled():
    sched = Scheduler()
    a = sched.call_later(10, lambda: None)
    sched.call_later(40, lambda: None)
    a.cancel()
    assert sched.next_due() == 40


def test_negative_delay_rejected():
    sched = Scheduler()
    with pytest.raises(ValueError):
        sched.call_later(-1, lambda: None)


def test_reset_drops_everything():
    sched = Scheduler()
    fired = []
    sched.call_later(10, lambda: fired.append(1))
    sched.reset()
    sched.advance_to(100)
    assert fired == []
    assert sched.pending() == 0
