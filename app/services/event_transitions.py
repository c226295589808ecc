"""Event status transitions.

Reads a single snapshot, validates the lifecycle move, runs the go-live gate
where required, then writes the new status with a conditional update so a
concurrent transition on the same event cannot also succeed.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from app.core.event_lifecycle import transition_fields, validate_transition
from app.core.exceptions import (
    EventNotFoundError,
    GoLiveRefusedError,
    TransitionConflictError,
)
from app.core.go_no_go import GoLiveDecision, attempt_go_live
from app.core.go_no_go import force_go_live as gate_force_go_live
from app.core.logging import get_logger, log_with_context
from app.core.schemas_events import EventSnapshot, EventStatus
from app.db.audit_logs import log_status_change
from app.db.events import get_event_snapshot, update_event_status

logger = get_logger(__name__)


def _load_snapshot(event_id: UUID) -> EventSnapshot:
    snapshot = get_event_snapshot(event_id)
    if snapshot is None:
        raise EventNotFoundError(f"Event {event_id} not found")
    return snapshot


def _apply_transition(
    snapshot: EventSnapshot,
    target: EventStatus,
    user_id: UUID | None = None,
    decision: GoLiveDecision | None = None,
) -> dict:
    rule = validate_transition(snapshot.status, target)
    patch = transition_fields(rule, datetime.now(UTC))

    updated = update_event_status(snapshot.id, patch, expected_status=snapshot.status)
    if updated is None:
        raise TransitionConflictError(
            f"Event {snapshot.id} changed status while transitioning to {target.value}"
        )

    forced = bool(decision and decision.forced)
    try:
        log_status_change(
            event_id=snapshot.id,
            from_status=snapshot.status.value,
            to_status=target.value,
            user_id=user_id,
            forced=forced,
            justification=decision.justification if decision else None,
            failing_blockers=[c.id for c in decision.failing_blockers] if decision else None,
        )
    except RuntimeError:
        logger.warning(f"Failed to write audit log for event {snapshot.id}, transition kept")

    log_with_context(
        logger,
        logging.INFO,
        f"Event {snapshot.id} moved {snapshot.status.value} -> {target.value}",
        event_id=str(snapshot.id),
        from_status=snapshot.status.value,
        to_status=target.value,
        forced=forced,
    )
    return updated


def lock_event(event_id: UUID, user_id: UUID | None = None) -> dict:
    """DRAFT → LOCKED."""
    snapshot = _load_snapshot(event_id)
    return _apply_transition(snapshot, EventStatus.LOCKED, user_id=user_id)


def go_live(event_id: UUID, user_id: UUID | None = None) -> tuple[dict, GoLiveDecision]:
    """
    LOCKED → LIVE when every go/no-go blocker passes.

    Args:
        event_id: Event UUID
        user_id: Who triggered the transition

    Returns:
        Tuple of (updated event record, gate decision)

    Raises:
        EventNotFoundError: Event does not exist
        InvalidTransitionError: Event is not LOCKED
        GoLiveRefusedError: A blocker check failed (no write happens)
        TransitionConflictError: Status changed concurrently
    """
    snapshot = _load_snapshot(event_id)
    validate_transition(snapshot.status, EventStatus.LIVE)

    decision = attempt_go_live(snapshot)
    if not decision.allowed:
        log_with_context(
            logger,
            logging.WARNING,
            f"Go-live refused for event {event_id}",
            event_id=str(event_id),
            failing_blockers=[c.id for c in decision.failing_blockers],
        )
        raise GoLiveRefusedError(decision)

    updated = _apply_transition(snapshot, EventStatus.LIVE, user_id=user_id, decision=decision)
    return updated, decision


def force_go_live(
    event_id: UUID,
    justification: str | None,
    user_id: UUID | None = None,
) -> tuple[dict, GoLiveDecision]:
    """
    LOCKED → LIVE regardless of check outcomes.

    The justification is mandatory and is stored in the audit log together
    with the blockers that were overridden.

    Raises:
        EventNotFoundError: Event does not exist
        InvalidTransitionError: Event is not LOCKED
        GoLiveRefusedError: Justification missing or blank
        TransitionConflictError: Status changed concurrently
    """
    snapshot = _load_snapshot(event_id)
    validate_transition(snapshot.status, EventStatus.LIVE)

    decision = gate_force_go_live(snapshot, justification)
    if not decision.allowed:
        raise GoLiveRefusedError(decision)

    if decision.failing_blockers:
        log_with_context(
            logger,
            logging.WARNING,
            f"Forcing go-live for event {event_id} "
            f"past {len(decision.failing_blockers)} blocker(s)",
            event_id=str(event_id),
            failing_blockers=[c.id for c in decision.failing_blockers],
            justification=decision.justification,
        )

    updated = _apply_transition(snapshot, EventStatus.LIVE, user_id=user_id, decision=decision)
    return updated, decision


def close_event(event_id: UUID, user_id: UUID | None = None) -> dict:
    """LIVE → CLOSED."""
    snapshot = _load_snapshot(event_id)
    return _apply_transition(snapshot, EventStatus.CLOSED, user_id=user_id)
