"""API endpoints for event go/no-go readiness and status transitions."""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query

from app.core.config import get_settings
from app.core.exceptions import (
    EventNotFoundError,
    GoLiveRefusedError,
    InvalidTransitionError,
    TransitionConflictError,
)
from app.core.go_no_go import GoNoGoReport, evaluate_go_no_go, get_go_no_go_summary
from app.core.logging import get_logger, log_with_context
from app.core.schemas_transitions import (
    AuditLogEntry,
    AuditLogResponse,
    ForceGoLiveRequest,
    TransitionRequest,
    TransitionResponse,
)
from app.db.audit_logs import list_event_audit_logs
from app.db.events import get_event_snapshot
from app.services import event_transitions

logger = get_logger(__name__)

router = APIRouter()


def _transition_error(event_id: UUID, e: Exception) -> HTTPException:
    """Map a transition failure to an HTTP error."""
    if isinstance(e, EventNotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, GoLiveRefusedError):
        decision = e.decision
        status_code = 422 if decision.justification_missing else 409
        return HTTPException(
            status_code=status_code,
            detail={
                "message": decision.reason,
                "failing_blockers": [c.model_dump(mode="json") for c in decision.failing_blockers],
                "summary": decision.summary.model_dump(mode="json"),
            },
        )
    if isinstance(e, (InvalidTransitionError, TransitionConflictError)):
        return HTTPException(status_code=409, detail=str(e))

    logger.exception(f"Failed to transition event {event_id}")
    return HTTPException(status_code=500, detail="Failed to update event status")


@router.get("/events/{event_id}/go-no-go", response_model=GoNoGoReport)
async def get_event_go_no_go(event_id: UUID) -> GoNoGoReport:
    """
    Evaluate the go/no-go checklist for an event.

    Checks are recomputed on every call from the current records.

    Args:
        event_id: Event UUID

    Returns:
        GoNoGoReport with checks in catalog order and summary counts

    Raises:
        HTTPException 404: If event not found
        HTTPException 500: If evaluation fails
    """
    try:
        snapshot = get_event_snapshot(event_id)
    except Exception as e:
        logger.exception(f"Failed to load snapshot for event {event_id}")
        raise HTTPException(status_code=500, detail="Failed to evaluate go/no-go") from e

    if snapshot is None:
        raise HTTPException(status_code=404, detail=f"Event {event_id} not found")

    checks = evaluate_go_no_go(snapshot)
    summary = get_go_no_go_summary(checks)

    log_with_context(
        logger,
        logging.INFO,
        f"Evaluated go/no-go for event {event_id}: can_go_live={summary.can_go_live}",
        event_id=str(event_id),
        blockers_passed=summary.blockers_passed,
        warnings_passed=summary.warnings_passed,
    )

    return GoNoGoReport(event_id=event_id, checks=checks, summary=summary)


@router.post("/events/{event_id}/lock", response_model=TransitionResponse)
async def lock_event(
    event_id: UUID, request: TransitionRequest | None = None
) -> TransitionResponse:
    """Move an event from DRAFT to LOCKED."""
    user_id = request.user_id if request else None
    try:
        updated = event_transitions.lock_event(event_id, user_id=user_id)
    except Exception as e:
        raise _transition_error(event_id, e) from e

    return TransitionResponse(
        event_id=event_id, status=updated["status"], updated_at=updated.get("updated_at")
    )


@router.post("/events/{event_id}/go-live", response_model=TransitionResponse)
async def go_live(event_id: UUID, request: TransitionRequest | None = None) -> TransitionResponse:
    """
    Move a LOCKED event to LIVE if every blocker check passes.

    Raises:
        HTTPException 404: If event not found
        HTTPException 409: If the event is not LOCKED or a blocker fails
            (detail lists the failing blockers)
    """
    user_id = request.user_id if request else None
    try:
        updated, decision = event_transitions.go_live(event_id, user_id=user_id)
    except Exception as e:
        raise _transition_error(event_id, e) from e

    return TransitionResponse(
        event_id=event_id,
        status=updated["status"],
        updated_at=updated.get("updated_at"),
        decision=decision,
    )


@router.post("/events/{event_id}/force-go-live", response_model=TransitionResponse)
async def force_go_live(event_id: UUID, request: ForceGoLiveRequest) -> TransitionResponse:
    """
    Move a LOCKED event to LIVE regardless of check outcomes.

    Raises:
        HTTPException 404: If event not found
        HTTPException 409: If the event is not LOCKED
        HTTPException 422: If the justification is blank
    """
    try:
        updated, decision = event_transitions.force_go_live(
            event_id, request.justification, user_id=request.user_id
        )
    except Exception as e:
        raise _transition_error(event_id, e) from e

    return TransitionResponse(
        event_id=event_id,
        status=updated["status"],
        updated_at=updated.get("updated_at"),
        decision=decision,
    )


@router.post("/events/{event_id}/close", response_model=TransitionResponse)
async def close_event(
    event_id: UUID, request: TransitionRequest | None = None
) -> TransitionResponse:
    """Move an event from LIVE to CLOSED."""
    user_id = request.user_id if request else None
    try:
        updated = event_transitions.close_event(event_id, user_id=user_id)
    except Exception as e:
        raise _transition_error(event_id, e) from e

    return TransitionResponse(
        event_id=event_id, status=updated["status"], updated_at=updated.get("updated_at")
    )


@router.get("/events/{event_id}/audit-log", response_model=AuditLogResponse)
async def get_event_audit_log(
    event_id: UUID,
    limit: int | None = Query(None, ge=1, le=500, description="Maximum number of entries"),
) -> AuditLogResponse:
    """List recent status changes for an event, newest first."""
    try:
        rows = list_event_audit_logs(event_id, limit=limit or get_settings().AUDIT_LOG_PAGE_SIZE)
    except Exception as e:
        logger.exception(f"Failed to list audit log for event {event_id}")
        raise HTTPException(status_code=500, detail="Failed to list audit log") from e

    entries = [AuditLogEntry.model_validate(row) for row in rows]
    return AuditLogResponse(event_id=event_id, entries=entries, total=len(entries))
