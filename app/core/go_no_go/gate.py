"""Go-live gate.

Decides whether a LOCKED event may move to LIVE. The gate only produces a
decision; the caller performs (and guards) the status write.
"""

from app.core.go_no_go.evaluate import (
    evaluate_go_no_go,
    failing_blockers,
    get_go_no_go_summary,
)
from app.core.go_no_go.types import GoLiveDecision
from app.core.logging import get_logger
from app.core.schemas_events import EventSnapshot

logger = get_logger(__name__)

EMPTY_JUSTIFICATION_REASON = "Une justification est requise pour forcer le passage en LIVE"


def attempt_go_live(snapshot: EventSnapshot) -> GoLiveDecision:
    """Allow go-live only when every blocker check passes.

    Args:
        snapshot: Event aggregate to evaluate

    Returns:
        GoLiveDecision; when refused, ``failing_blockers`` lists what to fix
    """
    checks = evaluate_go_no_go(snapshot)
    summary = get_go_no_go_summary(checks)
    failing = failing_blockers(checks)

    if not summary.can_go_live:
        logger.info(
            f"Go-live refused for event {snapshot.id}: "
            f"{len(failing)} blocker(s) failing ({', '.join(c.id for c in failing)})"
        )
        return GoLiveDecision(
            event_id=snapshot.id,
            allowed=False,
            reason=f"{len(failing)} critère(s) bloquant(s) non satisfait(s)",
            checks=checks,
            failing_blockers=failing,
            summary=summary,
        )

    return GoLiveDecision(
        event_id=snapshot.id,
        allowed=True,
        checks=checks,
        failing_blockers=[],
        summary=summary,
    )


def force_go_live(snapshot: EventSnapshot, justification: str | None) -> GoLiveDecision:
    """Allow go-live regardless of checks, provided a justification is given.

    A missing or blank justification refuses the operation. The checks are
    still evaluated so the caller can record which blockers were overridden.
    """
    checks = evaluate_go_no_go(snapshot)
    summary = get_go_no_go_summary(checks)
    failing = failing_blockers(checks)
    reason_text = (justification or "").strip()

    if not reason_text:
        logger.warning(f"Forced go-live rejected for event {snapshot.id}: empty justification")
        return GoLiveDecision(
            event_id=snapshot.id,
            allowed=False,
            forced=True,
            justification_missing=True,
            reason=EMPTY_JUSTIFICATION_REASON,
            checks=checks,
            failing_blockers=failing,
            summary=summary,
        )

    return GoLiveDecision(
        event_id=snapshot.id,
        allowed=True,
        forced=True,
        justification=reason_text,
        checks=checks,
        failing_blockers=failing,
        summary=summary,
    )
