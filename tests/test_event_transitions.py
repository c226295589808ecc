"""Tests for app.services.event_transitions with the DB layer mocked."""

import logging
from unittest.mock import patch
from uuid import uuid4

import pytest

from app.core.exceptions import (
    EventNotFoundError,
    GoLiveRefusedError,
    InvalidTransitionError,
    TransitionConflictError,
)
from app.core.logging import StructuredFormatter
from app.core.schemas_events import EventStatus
from app.services.event_transitions import close_event, force_go_live, go_live, lock_event
from tests.fixtures_events import EVENT_ID, ready_snapshot

SERVICE = "app.services.event_transitions"


@pytest.fixture
def mock_db():
    """Patch snapshot reads, status writes and audit logging."""
    with patch(f"{SERVICE}.get_event_snapshot") as mock_snapshot, \
         patch(f"{SERVICE}.update_event_status") as mock_update, \
         patch(f"{SERVICE}.log_status_change") as mock_audit:
        mock_update.side_effect = lambda event_id, patch, expected_status: {
            "id": str(event_id), **patch
        }
        yield mock_snapshot, mock_update, mock_audit


class TestGoLive:
    def test_ready_event_goes_live(self, mock_db):
        mock_snapshot, mock_update, mock_audit = mock_db
        mock_snapshot.return_value = ready_snapshot()

        updated, decision = go_live(EVENT_ID)

        assert updated["status"] == "LIVE"
        assert "live_at" in updated
        assert decision.allowed is True
        mock_update.assert_called_once()
        assert mock_update.call_args.kwargs["expected_status"] == EventStatus.LOCKED
        assert mock_audit.call_args.kwargs["forced"] is False

    def test_failing_blocker_refuses_without_write(self, mock_db):
        mock_snapshot, mock_update, mock_audit = mock_db
        mock_snapshot.return_value = ready_snapshot(selected_week=None)

        with pytest.raises(GoLiveRefusedError) as exc_info:
            go_live(EVENT_ID)

        assert [c.id for c in exc_info.value.decision.failing_blockers] == ["date-selected"]
        mock_update.assert_not_called()
        mock_audit.assert_not_called()

    def test_requires_locked_status(self, mock_db):
        mock_snapshot, mock_update, _ = mock_db
        mock_snapshot.return_value = ready_snapshot(status=EventStatus.DRAFT)

        with pytest.raises(InvalidTransitionError):
            go_live(EVENT_ID)
        mock_update.assert_not_called()

    def test_missing_event(self, mock_db):
        mock_snapshot, _, _ = mock_db
        mock_snapshot.return_value = None

        with pytest.raises(EventNotFoundError):
            go_live(EVENT_ID)

    def test_concurrent_transition_conflicts(self, mock_db):
        mock_snapshot, mock_update, mock_audit = mock_db
        mock_snapshot.return_value = ready_snapshot()
        mock_update.side_effect = None
        mock_update.return_value = None

        with pytest.raises(TransitionConflictError):
            go_live(EVENT_ID)
        mock_audit.assert_not_called()

    def test_audit_failure_keeps_transition(self, mock_db):
        mock_snapshot, _, mock_audit = mock_db
        mock_snapshot.return_value = ready_snapshot()
        mock_audit.side_effect = RuntimeError("Supabase error inserting audit_logs")

        updated, _ = go_live(EVENT_ID)
        assert updated["status"] == "LIVE"


class TestForceGoLive:
    def test_empty_justification_rejected(self, mock_db):
        mock_snapshot, mock_update, _ = mock_db
        mock_snapshot.return_value = ready_snapshot(selected_week=None)

        with pytest.raises(GoLiveRefusedError) as exc_info:
            force_go_live(EVENT_ID, "")

        assert exc_info.value.decision.forced is True
        mock_update.assert_not_called()

    def test_forced_past_blockers_is_audited(self, mock_db):
        mock_snapshot, _, mock_audit = mock_db
        mock_snapshot.return_value = ready_snapshot(selected_week=None)
        user_id = uuid4()

        updated, decision = force_go_live(
            EVENT_ID, "CEO approved despite pending visa", user_id=user_id
        )

        assert updated["status"] == "LIVE"
        assert decision.forced is True
        audit = mock_audit.call_args.kwargs
        assert audit["forced"] is True
        assert audit["justification"] == "CEO approved despite pending visa"
        assert audit["failing_blockers"] == ["date-selected"]
        assert audit["user_id"] == user_id

    def test_requires_locked_status(self, mock_db):
        mock_snapshot, _, _ = mock_db
        mock_snapshot.return_value = ready_snapshot(status=EventStatus.LIVE)

        with pytest.raises(InvalidTransitionError):
            force_go_live(EVENT_ID, "Already running")


class TestUngatedTransitions:
    def test_lock_ignores_readiness(self, mock_db):
        mock_snapshot, mock_update, _ = mock_db
        mock_snapshot.return_value = ready_snapshot(
            status=EventStatus.DRAFT, selected_week=None, vendors=[]
        )

        updated = lock_event(EVENT_ID)

        assert updated["status"] == "LOCKED"
        assert "locked_at" in updated
        assert mock_update.call_args.kwargs["expected_status"] == EventStatus.DRAFT

    def test_close_live_event(self, mock_db):
        mock_snapshot, _, mock_audit = mock_db
        mock_snapshot.return_value = ready_snapshot(status=EventStatus.LIVE)

        updated = close_event(EVENT_ID)

        assert updated["status"] == "CLOSED"
        assert mock_audit.call_args.kwargs["to_status"] == "CLOSED"

    def test_cannot_close_locked_event(self, mock_db):
        mock_snapshot, _, _ = mock_db
        mock_snapshot.return_value = ready_snapshot()

        with pytest.raises(InvalidTransitionError):
            close_event(EVENT_ID)


def _service_lines(caplog, level: int) -> list[str]:
    formatter = StructuredFormatter()
    return [
        formatter.format(r)
        for r in caplog.records
        if r.name == SERVICE and r.levelno == level
    ]


class TestTransitionLogging:
    def test_refusal_line_names_failing_blockers(self, mock_db, caplog):
        mock_snapshot, _, _ = mock_db
        mock_snapshot.return_value = ready_snapshot(selected_week=None, vendors=[])
        caplog.set_level(logging.INFO, logger=SERVICE)

        with pytest.raises(GoLiveRefusedError):
            go_live(EVENT_ID)

        [line] = _service_lines(caplog, logging.WARNING)
        assert f"message=Go-live refused for event {EVENT_ID}" in line
        assert f"event_id={EVENT_ID}" in line
        assert "failing_blockers=hotel-contracted,date-selected" in line

    def test_forced_line_names_overridden_blockers(self, mock_db, caplog):
        mock_snapshot, _, _ = mock_db
        mock_snapshot.return_value = ready_snapshot(selected_week=None)
        caplog.set_level(logging.INFO, logger=SERVICE)

        force_go_live(EVENT_ID, "Board chair sign-off")

        [warning] = _service_lines(caplog, logging.WARNING)
        assert "failing_blockers=date-selected" in warning
        assert "justification=Board chair sign-off" in warning

        [info] = _service_lines(caplog, logging.INFO)
        assert "from_status=LOCKED" in info
        assert "to_status=LIVE" in info
        assert "forced=True" in info
