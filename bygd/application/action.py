"""Per-entity action tracking.

Replaces ad-hoc busy flags: each user-triggered action on an entity moves
through idle -> pending -> done | failed, and tests assert on those
transitions rather than on disabled buttons.
"""

from typing import Optional

from bygd.domain.error import InvariantViolation
from bygd.domain.model.common import DomainModel
from bygd.domain.value import ActionStatus


def action_key(kind: str, entity_id: object = "") -> str:
    """Key identifying one action on one entity, e.g. ``like:<comment id>``."""
    return f"{kind}:{entity_id}"


class ActionState(DomainModel):
    """State of one user-triggered action.

    A finished action may be started again; a pending one may not.
    """

    status: ActionStatus = ActionStatus.IDLE
    message: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == ActionStatus.PENDING

    def start(self) -> "ActionState":
        if self.is_pending:
            raise InvariantViolation("Action is already in progress")
        return ActionState(status=ActionStatus.PENDING)

    def succeed(self) -> "ActionState":
        if not self.is_pending:
            raise InvariantViolation("Only a pending action can complete")
        return ActionState(status=ActionStatus.DONE)

    def fail(self, message: str) -> "ActionState":
        if not self.is_pending:
            raise InvariantViolation("Only a pending action can fail")
        return ActionState(status=ActionStatus.FAILED, message=message)


class ActionTracker:
    """Action states keyed by action key."""

    def __init__(self) -> None:
        self._states: dict[str, ActionState] = {}

    def get(self, key: str) -> ActionState:
        return self._states.get(key, ActionState())

    def begin(self, key: str) -> ActionState:
        self._states[key] = self.get(key).start()
        return self._states[key]

    def succeed(self, key: str) -> ActionState:
        self._states[key] = self.get(key).succeed()
        return self._states[key]

    def fail(self, key: str, message: str) -> ActionState:
        self._states[key] = self.get(key).fail(message)
        return self._states[key]

    @property
    def busy(self) -> frozenset[str]:
        return frozenset(k for k, s in self._states.items() if s.is_pending)
