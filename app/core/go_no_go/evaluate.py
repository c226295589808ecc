"""Go/no-go evaluation and aggregation (pure, no DB access)."""

from collections.abc import Iterable

from app.core.go_no_go.checks import CHECK_CATALOG, CheckDefinition
from app.core.go_no_go.types import CheckSeverity, GoNoGoCheck, GoNoGoSummary
from app.core.logging import get_logger
from app.core.schemas_events import EventSnapshot

logger = get_logger(__name__)


def evaluate_go_no_go(
    snapshot: EventSnapshot,
    catalog: Iterable[CheckDefinition] = CHECK_CATALOG,
) -> list[GoNoGoCheck]:
    """Run every check in the catalog against the snapshot.

    Args:
        snapshot: Event aggregate to evaluate
        catalog: Check definitions, in display order

    Returns:
        One GoNoGoCheck per definition, in catalog order
    """
    checks = [definition.run(snapshot) for definition in catalog]

    logger.debug(
        f"Evaluated go/no-go for event {snapshot.id}: "
        f"{sum(1 for c in checks if c.passed)}/{len(checks)} checks passed"
    )

    return checks


def _of_severity(checks: Iterable[GoNoGoCheck], severity: CheckSeverity) -> list[GoNoGoCheck]:
    return [c for c in checks if c.severity == severity]


def failing_blockers(checks: Iterable[GoNoGoCheck]) -> list[GoNoGoCheck]:
    return [c for c in _of_severity(checks, CheckSeverity.BLOCKER) if not c.passed]


def can_go_live(checks: Iterable[GoNoGoCheck]) -> bool:
    """True iff every blocker passed. Warnings never block."""
    return not failing_blockers(checks)


def get_go_no_go_summary(checks: Iterable[GoNoGoCheck]) -> GoNoGoSummary:
    """Count passed/total per severity alongside the go-live verdict."""
    checks = list(checks)
    blockers = _of_severity(checks, CheckSeverity.BLOCKER)
    warnings = _of_severity(checks, CheckSeverity.WARNING)

    return GoNoGoSummary(
        blockers_passed=sum(1 for c in blockers if c.passed),
        blockers_total=len(blockers),
        warnings_passed=sum(1 for c in warnings if c.passed),
        warnings_total=len(warnings),
        can_go_live=can_go_live(checks),
    )
