"""Tests for EntityRegistry population, mutation, hooks, and snapshots."""

import pytest

from drone.registry import EntityRegistry
from drone.types import (
    CapacityExceededError,
    CorruptStateError,
    EntityKind,
    InvalidVariationError,
    UnknownEntityError,
)

C = EntityKind.COMMUTER
S = EntityKind.SET_DRESSING

POOLS = {
    C: {"commuter1": ["c1.png", "c1_a.png"], "commuter2": ["c2.png"]},
    S: {"bench": ["bench.png", "bench_a.png", "bench_b.png"], "ghost": []},
}


def make(capacity=8):
    return EntityRegistry(POOLS, {C: capacity, S: capacity})


def test_add_assigns_first_variation_and_index():
    reg = make()
    a = reg.add(C, "commuter1")
    b = reg.add(C, "commuter2")
    assert a.current_variation == "c1.png"
    assert (a.index, b.index) == (0, 1)
    assert a.id == "commuter-0"
    assert b.id == "commuter-1"


def test_ids_unique_across_kinds():
    reg = make()
    c = reg.add(C, "commuter1")
    s = reg.add(S, "bench")
    assert c.id != s.id
    assert reg.get(s.id) is s


def test_capacity_respected():
    reg = make(capacity=8)
    for _ in range(8):
        reg.add(S, "bench")
    for _ in range(3):
        with pytest.raises(CapacityExceededError):
            reg.add(S, "bench")
    assert reg.count(S) == 8
    assert reg.is_full(S)
    assert reg.count(C) == 0


def test_add_unknown_or_empty_type():
    reg = make()
    with pytest.raises(ValueError):
        reg.add(C, "nobody")
    with pytest.raises(ValueError):
        reg.add(S, "ghost")


def test_types_skip_empty_pools():
    reg = make()
    assert reg.types(S) == ["bench"]
    assert reg.types(C) == ["commuter1", "commuter2"]


def test_eligible_for_mutation_filters_single_variation_pools():
    reg = make()
    a = reg.add(C, "commuter1")
    reg.add(C, "commuter2")
    assert reg.eligible_for_mutation(C) == [a]


def test_apply_variation():
    reg = make()
    a = reg.add(C, "commuter1")
    reg.apply_variation(a.id, "c1_a.png")
    assert reg.get(a.id).current_variation == "c1_a.png"


def test_apply_variation_errors_leave_state_unchanged():
    reg = make()
    a = reg.add(C, "commuter1")
    with pytest.raises(UnknownEntityError):
        reg.apply_variation("commuter-9", "c1_a.png")
    with pytest.raises(InvalidVariationError):
        reg.apply_variation(a.id, "bench.png")
    assert a.current_variation == "c1.png"


def test_hooks_fire_on_add_and_change():
    reg = make()
    added, changed = [], []
    reg.on_add(lambda e: added.append(e.id))
    reg.on_change(lambda e, prev: changed.append((e.id, prev, e.current_variation)))
    a = reg.add(C, "commuter1")
    reg.apply_variation(a.id, "c1_a.png")
    reg.apply_variation(a.id, "c1_a.png")  # no-op, no hook
    assert added == ["commuter-0"]
    assert changed == [("commuter-0", "c1.png", "c1_a.png")]


def test_snapshot_restore_roundtrip_without_hooks():
    reg = make()
    a = reg.add(C, "commuter1")
    reg.add(S, "bench")
    reg.apply_variation(a.id, "c1_a.png")
    snap = reg.snapshot()

    other = make()
    fired = []
    other.on_add(lambda e: fired.append(e))
    other.restore(snap)
    assert fired == []
    assert other.get("commuter-0").current_variation == "c1_a.png"
    assert other.count(S) == 1


def test_restore_malformed_leaves_registry_empty():
    reg = make()
    reg.add(C, "commuter1")
    with pytest.raises(CorruptStateError):
        reg.restore({"entities": [{"kind": "commuter", "type": "commuter1", "variation": "nope"}]})
    assert reg.entities() == []


def test_empty_copy_shares_pools_not_entities_or_hooks():
    reg = make(capacity=1)
    fired = []
    reg.on_add(lambda e: fired.append(e.id))
    reg.add(C, "commuter1")
    copy = reg.empty_copy()
    assert copy.count(C) == 0
    copy.add(C, "commuter1")
    assert copy.is_full(C)
    assert fired == ["commuter-0"]
    assert reg.count(C) == 1
