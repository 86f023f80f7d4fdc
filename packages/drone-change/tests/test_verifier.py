"""Tests for ChangeVerifier outcomes and PendingChange state."""

import pytest

from drone import EntityKind

from drone_change import ChangeAction, ChangeVerifier, Outcome, PendingChange


def _pending(target="commuter-0"):
    return PendingChange(
        target_id=target,
        kind=EntityKind.COMMUTER,
        action=ChangeAction.MUTATE,
        day=4,
        from_variation="a",
        to_variation="b",
    )


def test_no_pending_change():
    assert ChangeVerifier().check(None, "commuter-0") is Outcome.NO_PENDING_CHANGE


def test_correct_then_already_found():
    verifier = ChangeVerifier()
    pending = _pending()
    assert verifier.check(pending, "commuter-0") is Outcome.CORRECT
    assert pending.found
    assert verifier.check(pending, "commuter-0") is Outcome.ALREADY_FOUND
    assert pending.found


def test_wrong_entity_leaves_found_false():
    verifier = ChangeVerifier()
    pending = _pending()
    assert verifier.check(pending, "commuter-1") is Outcome.WRONG_ENTITY
    assert not pending.found
    assert verifier.check(pending, "commuter-0") is Outcome.CORRECT


def test_mark_found_sets_flag_once():
    pending = _pending()
    assert pending.mark_found()
    assert not pending.mark_found()
    assert pending.found and not pending.missed


def test_missed_change_cannot_be_found():
    pending = _pending()
    pending.mark_missed()
    assert not pending.mark_found()
    assert ChangeVerifier().check(pending, "commuter-0") is Outcome.NO_PENDING_CHANGE
    assert not pending.found


def test_mutate_must_change_something():
    with pytest.raises(ValueError):
        PendingChange("commuter-0", EntityKind.COMMUTER, ChangeAction.MUTATE,
                      from_variation="a", to_variation="a")
    with pytest.raises(ValueError):
        PendingChange("commuter-0", EntityKind.COMMUTER, ChangeAction.MUTATE)


def test_missed_only_when_not_found():
    pending = _pending()
    assert pending.mark_missed()
    assert pending.missed and pending.resolved
    assert not pending.mark_missed()

    found = _pending()
    found.mark_found()
    assert not found.mark_missed()
    assert not found.missed


def test_dict_round_trip_keeps_flags():
    pending = _pending()
    pending.mark_found()
    assert PendingChange.from_dict(pending.to_dict()) == pending
