"""Change records and verification outcomes."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from drone import EntityId, EntityKind


class ChangeAction(Enum):
    MUTATE = "mutate"
    ADD = "add"


class Outcome(Enum):
    NO_PENDING_CHANGE = "no-pending-change"
    WRONG_ENTITY = "wrong-entity"
    ALREADY_FOUND = "already-found"
    CORRECT = "correct"


@dataclass
class PendingChange:
    """The single difference the player has to spot today.

    Only ``found`` and ``missed`` change after creation, and only through
    ``mark_found`` and ``mark_missed``. Each flag is set at most once and
    the two never both hold.
    """

    target_id: EntityId
    kind: EntityKind
    action: ChangeAction
    day: int = 0
    from_variation: str | None = None
    to_variation: str | None = None
    found: bool = False
    missed: bool = False

    def __post_init__(self) -> None:
        if self.action is ChangeAction.MUTATE:
            if self.from_variation is None or self.to_variation is None:
                raise ValueError("MUTATE changes need from_variation and to_variation")
            if self.from_variation == self.to_variation:
                raise ValueError(
                    f"MUTATE change on {self.target_id} does not change anything "
                    f"({self.from_variation!r})"
                )

    @property
    def resolved(self) -> bool:
        return self.found or self.missed

    def mark_found(self) -> bool:
        """Set ``found``. Returns False if the change is already resolved."""
        if self.found or self.missed:
            return False
        self.found = True
        return True

    def mark_missed(self) -> bool:
        if self.found or self.missed:
            return False
        self.missed = True
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "target_id": self.target_id,
            "kind": self.kind.value,
            "action": self.action.value,
            "day": self.day,
            "from_variation": self.from_variation,
            "to_variation": self.to_variation,
            "found": self.found,
            "missed": self.missed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PendingChange:
        return cls(
            target_id=data["target_id"],
            kind=EntityKind(data["kind"]),
            action=ChangeAction(data["action"]),
            day=int(data.get("day", 0)),
            from_variation=data.get("from_variation"),
            to_variation=data.get("to_variation"),
            found=bool(data.get("found", False)),
            missed=bool(data.get("missed", False)),
        )
