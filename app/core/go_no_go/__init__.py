"""Go/no-go readiness evaluation for events.

Runs a fixed catalog of readiness checks against an event snapshot and
gates the LOCKED → LIVE transition on the blocker checks.

Usage:
    from app.core.go_no_go import attempt_go_live, evaluate_go_no_go

    checks = evaluate_go_no_go(snapshot)
    decision = attempt_go_live(snapshot)
    print(f"Allowed: {decision.allowed} ({decision.summary.blockers_passed} blockers passed)")
"""

from app.core.go_no_go.checks import BUDGET_TOLERANCE, CHECK_CATALOG, CheckDefinition
from app.core.go_no_go.evaluate import (
    can_go_live,
    evaluate_go_no_go,
    failing_blockers,
    get_go_no_go_summary,
)
from app.core.go_no_go.gate import attempt_go_live, force_go_live
from app.core.go_no_go.types import (
    CheckSeverity,
    GoLiveDecision,
    GoNoGoCheck,
    GoNoGoReport,
    GoNoGoSummary,
)

__all__ = [
    "attempt_go_live",
    "force_go_live",
    "evaluate_go_no_go",
    "can_go_live",
    "failing_blockers",
    "get_go_no_go_summary",
    "CheckDefinition",
    "CheckSeverity",
    "GoLiveDecision",
    "GoNoGoCheck",
    "GoNoGoReport",
    "GoNoGoSummary",
    "BUDGET_TOLERANCE",
    "CHECK_CATALOG",
]
