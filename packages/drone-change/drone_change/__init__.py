"""drone-change - daily change selection and verification."""
from __future__ import annotations

from drone_change.schedule import (
    PoolSchedule, make_alternating_schedule, make_weighted_schedule,
)
from drone_change.selector import TUTORIAL_DAY, ChangeSelector
from drone_change.targets import (
    ChangeTarget, CommuterTarget, SetDressingTarget, default_targets,
)
from drone_change.types import ChangeAction, Outcome, PendingChange
from drone_change.variation import first_different_variation, pick_different_variation
from drone_change.verifier import ChangeVerifier

__all__ = [
    "ChangeAction",
    "Outcome",
    "PendingChange",
    "ChangeSelector",
    "ChangeVerifier",
    "ChangeTarget",
    "CommuterTarget",
    "SetDressingTarget",
    "default_targets",
    "PoolSchedule",
    "make_weighted_schedule",
    "make_alternating_schedule",
    "pick_different_variation",
    "first_different_variation",
    "TUTORIAL_DAY",
]
