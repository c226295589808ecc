"""Event database operations: snapshot assembly and status writes."""

from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.core.schemas_events import EventSnapshot, EventStatus
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

SNAPSHOT_EVENT_COLUMNS = (
    "id, name, status, selected_week, budget_planned, locked_at, live_at, closed_at"
)


def get_event(event_id: UUID) -> dict[str, Any] | None:
    """
    Get an event record.

    Args:
        event_id: Event UUID

    Returns:
        Event record as dict or None if not found
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table("events")
            .select(SNAPSHOT_EVENT_COLUMNS)
            .eq("id", str(event_id))
            .execute()
        )

        return response.data[0] if response.data else None

    except Exception as e:
        logger.error(f"Failed to get event {event_id}: {e}")
        raise RuntimeError(f"Supabase error reading events: {str(e)}") from e


def _list_for_event(table: str, event_id: UUID) -> list[dict[str, Any]]:
    supabase = get_supabase()
    response = supabase.table(table).select("*").eq("event_id", str(event_id)).execute()
    return response.data or []


def _list_tasks(workstream_ids: list[str]) -> list[dict[str, Any]]:
    if not workstream_ids:
        return []
    supabase = get_supabase()
    response = supabase.table("tasks").select("*").in_("workstream_id", workstream_ids).execute()
    return response.data or []


def get_event_snapshot(event_id: UUID) -> EventSnapshot | None:
    """
    Assemble the go/no-go snapshot for one event.

    Reads the event row, then participants, vendors, workstreams (with their
    tasks), company visits and budget lines scoped to the event.

    Args:
        event_id: Event UUID

    Returns:
        EventSnapshot or None if the event does not exist
    """
    event = get_event(event_id)
    if event is None:
        return None

    try:
        workstreams = _list_for_event("workstreams", event_id)
        tasks = _list_tasks([w["id"] for w in workstreams])

        tasks_by_workstream: dict[str, list[dict[str, Any]]] = {}
        for task in tasks:
            tasks_by_workstream.setdefault(task["workstream_id"], []).append(task)

        snapshot = EventSnapshot.model_validate(
            {
                **event,
                "participants": _list_for_event("participants", event_id),
                "vendors": _list_for_event("vendors", event_id),
                "workstreams": [
                    {**w, "tasks": tasks_by_workstream.get(w["id"], [])} for w in workstreams
                ],
                "company_visits": _list_for_event("company_visits", event_id),
                "budget_lines": _list_for_event("budget_lines", event_id),
            }
        )

    except Exception as e:
        logger.error(f"Failed to assemble snapshot for event {event_id}: {e}")
        raise RuntimeError(f"Supabase error reading event snapshot: {str(e)}") from e

    logger.debug(
        f"Assembled snapshot for event {event_id}: "
        f"{len(snapshot.participants)} participants, {len(snapshot.vendors)} vendors, "
        f"{len(tasks)} tasks"
    )
    return snapshot


def update_event_status(
    event_id: UUID,
    patch: dict[str, Any],
    expected_status: EventStatus,
) -> dict[str, Any] | None:
    """
    Write a status change only if the event is still in ``expected_status``.

    Args:
        event_id: Event UUID
        patch: Columns to update (status and timestamps)
        expected_status: Status the event must currently have

    Returns:
        Updated event record, or None if the event no longer had the
        expected status (another transition won)
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table("events")
            .update(patch)
            .eq("id", str(event_id))
            .eq("status", EventStatus(expected_status).value)
            .execute()
        )

    except Exception as e:
        logger.error(f"Failed to update status for event {event_id}: {e}")
        raise RuntimeError(f"Supabase error updating events: {str(e)}") from e

    if not response.data:
        return None

    logger.info(f"Updated event {event_id} status to {patch.get('status')}")
    return response.data[0]
