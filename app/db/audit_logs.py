"""Audit log database operations."""

from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

ACTION_STATUS_CHANGE = "STATUS_CHANGE"


def log_status_change(
    event_id: UUID,
    from_status: str,
    to_status: str,
    user_id: UUID | None = None,
    forced: bool = False,
    justification: str | None = None,
    failing_blockers: list[str] | None = None,
) -> dict[str, Any]:
    """
    Record an event status change.

    Args:
        event_id: Event UUID
        from_status: Status before the transition
        to_status: Status after the transition
        user_id: Who triggered the transition
        forced: Whether go-live was forced past failing blockers
        justification: Reason given for a forced go-live
        failing_blockers: Ids of blocker checks failing at transition time

    Returns:
        Inserted audit log record
    """
    supabase = get_supabase()

    changes: dict[str, Any] = {"from": from_status, "to": to_status}
    if forced:
        changes["forced"] = True
        changes["justification"] = justification
        changes["failing_blockers"] = failing_blockers or []

    try:
        response = (
            supabase.table("audit_logs")
            .insert(
                {
                    "action": ACTION_STATUS_CHANGE,
                    "entity_type": "event",
                    "entity_id": str(event_id),
                    "event_id": str(event_id),
                    "user_id": str(user_id) if user_id else None,
                    "changes": changes,
                }
            )
            .execute()
        )

        if not response.data:
            raise RuntimeError("Failed to insert audit log")

        return response.data[0]

    except Exception as e:
        logger.error(f"Failed to log status change for event {event_id}: {e}")
        raise RuntimeError(f"Supabase error inserting audit_logs: {str(e)}") from e


def list_event_audit_logs(event_id: UUID, limit: int = 50) -> list[dict[str, Any]]:
    """
    List recent status changes for an event, newest first.

    Args:
        event_id: Event UUID
        limit: Maximum number of entries

    Returns:
        List of audit log records
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table("audit_logs")
            .select("*")
            .eq("event_id", str(event_id))
            .eq("action", ACTION_STATUS_CHANGE)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )

        return response.data or []

    except Exception as e:
        logger.error(f"Failed to list audit logs for event {event_id}: {e}")
        raise RuntimeError(f"Supabase error reading audit_logs: {str(e)}") from e
