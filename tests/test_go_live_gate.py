"""Tests for the go-live gate decisions."""

from app.core.go_no_go import attempt_go_live, force_go_live
from app.core.go_no_go.gate import EMPTY_JUSTIFICATION_REASON
from tests.fixtures_events import EVENT_ID, ready_snapshot


def test_attempt_allowed_when_blockers_pass(snapshot):
    decision = attempt_go_live(snapshot)
    assert decision.allowed is True
    assert decision.forced is False
    assert decision.failing_blockers == []
    assert decision.event_id == EVENT_ID
    assert len(decision.checks) == 10


def test_attempt_refused_lists_failing_blockers():
    decision = attempt_go_live(ready_snapshot(selected_week=None, vendors=[]))
    assert decision.allowed is False
    assert [c.id for c in decision.failing_blockers] == ["hotel-contracted", "date-selected"]
    assert decision.reason == "2 critère(s) bloquant(s) non satisfait(s)"
    assert decision.summary.can_go_live is False


def test_force_rejects_empty_justification():
    decision = force_go_live(ready_snapshot(selected_week=None), "")
    assert decision.allowed is False
    assert decision.forced is True
    assert decision.reason == EMPTY_JUSTIFICATION_REASON
    assert decision.justification is None


def test_force_rejects_blank_and_missing_justification(snapshot):
    assert force_go_live(snapshot, "   \n").allowed is False
    assert force_go_live(snapshot, None).allowed is False


def test_force_allows_despite_failing_blockers():
    decision = force_go_live(
        ready_snapshot(selected_week=None),
        "CEO approved despite pending visa",
    )
    assert decision.allowed is True
    assert decision.forced is True
    assert decision.justification == "CEO approved despite pending visa"
    assert [c.id for c in decision.failing_blockers] == ["date-selected"]
    assert decision.summary.can_go_live is False


def test_force_strips_justification(snapshot):
    decision = force_go_live(snapshot, "  Board chair sign-off  ")
    assert decision.justification == "Board chair sign-off"


def test_justification_flag_only_set_for_blank_force(snapshot):
    assert force_go_live(snapshot, "").justification_missing is True
    assert force_go_live(snapshot, "Board chair sign-off").justification_missing is False
    assert attempt_go_live(ready_snapshot(selected_week=None)).justification_missing is False
