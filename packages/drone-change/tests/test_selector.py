"""Tests for ChangeSelector and the per-population change targets."""

import random

import pytest

from drone import EntityKind, EntityRegistry

from drone_change import (
    ChangeAction,
    ChangeSelector,
    CommuterTarget,
    SetDressingTarget,
)

C = EntityKind.COMMUTER
S = EntityKind.SET_DRESSING

POOLS = {
    C: {
        "commuter1": ["c1", "c1_a"],
        "commuter2": ["c2", "c2_a", "c2_b"],
        "commuter3": ["c3"],
    },
    S: {
        "bench": ["bench", "bench_a"],
        "bottle": ["bottle"],
        "trash": ["trash", "trash_a", "trash_b"],
    },
}


def _selector(seed=1, pools=POOLS, capacities=None, targets=None):
    registry = EntityRegistry(pools, capacities)
    return ChangeSelector(registry, random.Random(seed), targets), registry


class TestFirstChange:
    def test_tutorial_change_is_deterministic(self):
        for seed in range(5):
            selector, registry = _selector(
                seed, pools={C: {"solo": ["a", "b"]}, S: {}},
            )
            registry.add(C, "solo")
            change = selector.first_change()
            assert change.action is ChangeAction.MUTATE
            assert (change.from_variation, change.to_variation) == ("a", "b")
            assert change.day == 4
            assert registry.get(change.target_id).current_variation == "b"

    def test_always_targets_first_commuter(self):
        selector, registry = _selector()
        first = registry.add(C, "commuter1")
        registry.add(C, "commuter2")
        assert selector.first_change().target_id == first.id

    def test_single_variation_yields_none(self):
        selector, registry = _selector()
        registry.add(C, "commuter3")
        assert selector.first_change() is None
        assert registry.first(C).current_variation == "c3"

    def test_no_commuter_yields_none(self):
        selector, _ = _selector()
        assert selector.first_change() is None


class TestCommuterChanges:
    def test_to_never_equals_from(self):
        selector, registry = _selector(seed=3)
        registry.add(C, "commuter1")
        registry.add(C, "commuter2")
        registry.add(C, "commuter3")
        for day in range(5, 200):
            change = selector.random_change(C, day)
            assert change is not None
            assert change.to_variation != change.from_variation
            assert registry.get(change.target_id).current_variation == change.to_variation

    def test_skips_single_variation_commuters(self):
        selector, registry = _selector(seed=9)
        registry.add(C, "commuter3")
        target = registry.add(C, "commuter1")
        for day in range(5, 50):
            assert selector.random_change(C, day).target_id == target.id

    def test_no_eligible_commuter_yields_none(self):
        selector, registry = _selector()
        registry.add(C, "commuter3")
        assert selector.random_change(C, 5) is None


class TestSetDressingChanges:
    def test_adds_until_minimum_population(self):
        selector, registry = _selector(
            targets={C: CommuterTarget(), S: SetDressingTarget(add_probability=0.0)},
        )
        for day in range(5, 9):
            change = selector.random_change(S, day)
            assert change.action is ChangeAction.ADD
            assert change.from_variation is None
        assert registry.count(S) == 4

    def test_mutates_above_minimum_when_add_unlikely(self):
        selector, registry = _selector(
            targets={C: CommuterTarget(), S: SetDressingTarget(min_population=0, add_probability=0.0)},
        )
        registry.add(S, "trash")
        change = selector.random_change(S, 5)
        assert change.action is ChangeAction.MUTATE
        assert change.from_variation == "trash"
        assert change.to_variation in ("trash_a", "trash_b")

    def test_mutate_without_candidates_falls_back_to_add(self):
        selector, registry = _selector(
            targets={C: CommuterTarget(), S: SetDressingTarget(min_population=0, add_probability=0.0)},
        )
        registry.add(S, "bottle")
        change = selector.random_change(S, 5)
        assert change.action is ChangeAction.ADD
        assert registry.count(S) == 2

    def test_full_and_unchangeable_yields_none(self):
        selector, registry = _selector(
            pools={C: {}, S: {"bottle": ["bottle"]}},
            capacities={S: 2},
        )
        registry.add(S, "bottle")
        registry.add(S, "bottle")
        assert selector.random_change(S, 5) is None
        assert registry.count(S) == 2

    def test_no_prop_types_yields_none(self):
        selector, registry = _selector(pools={C: POOLS[C], S: {}})
        for day in range(5, 12):
            assert selector.random_change(S, day) is None
        assert registry.count(S) == 0

    def test_full_population_mutates(self):
        selector, registry = _selector(capacities={S: 1})
        registry.add(S, "trash")
        change = selector.random_change(S, 5)
        assert change.action is ChangeAction.MUTATE
        assert registry.count(S) == 1

    def test_population_never_exceeds_capacity(self):
        selector, registry = _selector(seed=4, capacities={S: 5})
        for day in range(5, 100):
            selector.random_change(S, day)
            assert registry.count(S) <= 5


class TestAddEntity:
    def test_first_commuter_is_first_configured_type(self):
        for seed in range(5):
            selector, _ = _selector(seed)
            assert selector.add_entity(C).type == "commuter1"

    def test_commuters_prefer_unused_types(self):
        selector, registry = _selector(seed=2)
        for _ in range(3):
            selector.add_entity(C)
        assert sorted(e.type for e in registry.entities(C)) == [
            "commuter1", "commuter2", "commuter3",
        ]

    def test_returns_none_when_full(self):
        selector, registry = _selector(capacities={C: 1})
        assert selector.add_entity(C) is not None
        assert selector.add_entity(C) is None
        assert registry.count(C) == 1


def test_missing_target_rejected():
    registry = EntityRegistry(POOLS)
    with pytest.raises(ValueError):
        ChangeSelector(registry, random.Random(0), {C: CommuterTarget()})


def test_set_dressing_target_validates_arguments():
    with pytest.raises(ValueError):
        SetDressingTarget(add_probability=1.5)
    with pytest.raises(ValueError):
        SetDressingTarget(min_population=-1)
