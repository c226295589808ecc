"""Event lifecycle — DRAFT → LOCKED → LIVE → CLOSED.

Transitions are linear and forward-only. Only LOCKED → LIVE is gated by
go/no-go readiness; the other transitions are unconditional.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.core.exceptions import InvalidTransitionError
from app.core.schemas_events import EventStatus

# =============================================================================
# Status definitions
# =============================================================================

STATUS_ORDER = [
    EventStatus.DRAFT,
    EventStatus.LOCKED,
    EventStatus.LIVE,
    EventStatus.CLOSED,
]

STATUS_LABELS = {
    EventStatus.DRAFT: "Brouillon",
    EventStatus.LOCKED: "Verrouillé",
    EventStatus.LIVE: "Live",
    EventStatus.CLOSED: "Clôturé",
}


# =============================================================================
# Transition rules (declarative)
# =============================================================================


@dataclass(frozen=True)
class TransitionRule:
    from_status: EventStatus
    to_status: EventStatus
    gated: bool
    timestamp_field: str | None
    description: str


TRANSITION_RULES: list[TransitionRule] = [
    TransitionRule(
        from_status=EventStatus.DRAFT,
        to_status=EventStatus.LOCKED,
        gated=False,
        timestamp_field="locked_at",
        description="Date and scope frozen, logistics under way",
    ),
    TransitionRule(
        from_status=EventStatus.LOCKED,
        to_status=EventStatus.LIVE,
        gated=True,
        timestamp_field="live_at",
        description="All go/no-go blockers cleared (or forced with justification)",
    ),
    TransitionRule(
        from_status=EventStatus.LIVE,
        to_status=EventStatus.CLOSED,
        gated=False,
        timestamp_field="closed_at",
        description="Event finished",
    ),
]

_RULE_BY_FROM = {r.from_status: r for r in TRANSITION_RULES}


# =============================================================================
# Evaluation functions (pure — no DB access)
# =============================================================================


def get_next_status(current: EventStatus) -> EventStatus | None:
    """Status that follows ``current``, or None for the final status."""
    rule = _RULE_BY_FROM.get(EventStatus(current))
    return rule.to_status if rule else None


def can_transition(current: EventStatus, target: EventStatus) -> bool:
    return get_next_status(current) == EventStatus(target)


def is_gated(current: EventStatus, target: EventStatus) -> bool:
    """Whether ``current → target`` requires the go/no-go gate."""
    rule = _RULE_BY_FROM.get(EventStatus(current))
    return bool(rule and rule.to_status == EventStatus(target) and rule.gated)


def validate_transition(current: EventStatus, target: EventStatus) -> TransitionRule:
    """Return the rule for ``current → target``.

    Raises InvalidTransitionError for same-status, backward, or skipping moves.
    """
    current = EventStatus(current)
    target = EventStatus(target)

    if current == target:
        raise InvalidTransitionError(f"Event is already {STATUS_LABELS[current]}")

    if STATUS_ORDER.index(target) < STATUS_ORDER.index(current):
        raise InvalidTransitionError(
            f"Cannot move backward from {STATUS_LABELS[current]} to {STATUS_LABELS[target]}"
        )

    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Cannot skip from {STATUS_LABELS[current]} to {STATUS_LABELS[target]}"
        )

    return _RULE_BY_FROM[current]


def transition_fields(rule: TransitionRule, now: datetime) -> dict[str, Any]:
    """Column patch to persist for a transition."""
    stamp = now.isoformat()
    fields: dict[str, Any] = {
        "status": rule.to_status.value,
        "updated_at": stamp,
    }
    if rule.timestamp_field:
        fields[rule.timestamp_field] = stamp
    return fields
