"""Exceptions raised by the event transition service."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.core.go_no_go.types import GoLiveDecision


class EventNotFoundError(LookupError):
    """Raised when an event id does not match any record."""


class InvalidTransitionError(ValueError):
    """Raised when a lifecycle transition is not allowed from the current status."""


class TransitionConflictError(RuntimeError):
    """Raised when the event status changed between read and write."""


class GoLiveRefusedError(Exception):
    """Raised when go-live is refused.

    Carries the decision so callers can render the failing blockers.
    """

    def __init__(self, decision: "GoLiveDecision"):
        self.decision = decision
        super().__init__(decision.reason or "Go-live refused")
