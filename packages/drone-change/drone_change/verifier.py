"""ChangeVerifier - matches a clicked entity against the pending change."""
from __future__ import annotations

from drone import EntityId

from drone_change.types import Outcome, PendingChange


class ChangeVerifier:
    """Stateless. ``check`` is the only place a change becomes found."""

    def check(self, pending: PendingChange | None, entity_id: EntityId) -> Outcome:
        if pending is None:
            return Outcome.NO_PENDING_CHANGE
        if pending.found:
            return Outcome.ALREADY_FOUND
        if pending.missed:
            return Outcome.NO_PENDING_CHANGE
        if entity_id != pending.target_id:
            return Outcome.WRONG_ENTITY
        pending.mark_found()
        return Outcome.CORRECT
