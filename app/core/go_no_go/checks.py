"""Go/no-go check catalog.

Each check is a declarative definition (id, labels, severity) plus a pure
function of the event snapshot returning ``(passed, details)``. The catalog
order is the display order.

Checks of the form "every X must satisfy P" pass when there is no X:
an event with no vendors of a category has nothing to block on yet.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, TypeVar

from app.core.go_no_go.formatting import format_amount, format_week
from app.core.go_no_go.types import CheckSeverity, GoNoGoCheck
from app.core.schemas_events import (
    CompanyVisit,
    Criticality,
    EventSnapshot,
    ParticipantRole,
    RsvpStatus,
    Task,
    TaskStatus,
    VendorCategory,
    VisaStatus,
    WorkstreamType,
)

T = TypeVar("T")

CheckOutcome = tuple[bool, Optional[str]]

# Committed spend may exceed the planned budget by this fraction
BUDGET_TOLERANCE = Decimal("0.10")

AV_CATEGORIES = frozenset({VendorCategory.AV_EQUIPMENT, VendorCategory.TRANSLATION})


@dataclass(frozen=True)
class CheckDefinition:
    """Definition of a go/no-go check."""

    id: str
    label: str
    description: str
    severity: CheckSeverity
    evaluate: Callable[[EventSnapshot], CheckOutcome]

    def run(self, snapshot: EventSnapshot) -> GoNoGoCheck:
        passed, details = self.evaluate(snapshot)
        return GoNoGoCheck(
            id=self.id,
            label=self.label,
            description=self.description,
            severity=self.severity,
            passed=passed,
            details=details,
        )


# =============================================================================
# Helpers
# =============================================================================


def all_or_empty(items: Iterable[T], predicate: Callable[[T], bool]) -> bool:
    """True when every item satisfies ``predicate``, including when there are none."""
    return all(predicate(item) for item in items)


def _to_decimal(value: Optional[float]) -> Decimal:
    # str() keeps 0.1 as Decimal("0.1") rather than its binary expansion
    amount = Decimal(str(value or 0))
    return amount if amount.is_finite() else Decimal(0)


def _all_tasks(snapshot: EventSnapshot) -> list[Task]:
    return [task for workstream in snapshot.workstreams for task in workstream.tasks]


# =============================================================================
# Checks
# =============================================================================


def check_visas_approved(snapshot: EventSnapshot) -> CheckOutcome:
    needing_visa = [p for p in snapshot.participants if p.needs_visa]
    if not needing_visa:
        return True, "Aucun visa requis"

    approved = [p for p in needing_visa if p.visa_status == VisaStatus.APPROVED]
    return (
        len(approved) == len(needing_visa),
        f"{len(approved)}/{len(needing_visa)} visas approuvés",
    )


def check_hotel_contracted(snapshot: EventSnapshot) -> CheckOutcome:
    contracted = next(
        (
            v
            for v in snapshot.vendors
            if v.category == VendorCategory.HOTEL and v.contract_signed
        ),
        None,
    )
    if contracted is None:
        return False, "Aucun contrat hôtel signé"
    return True, f"Contrat signé: {contracted.name}"


def check_av_confirmed(snapshot: EventSnapshot) -> CheckOutcome:
    av_vendors = [v for v in snapshot.vendors if v.category in AV_CATEGORIES]
    if not av_vendors:
        return True, "Non requis"

    signed = [v for v in av_vendors if v.contract_signed]
    return all_or_empty(av_vendors, lambda v: bool(v.contract_signed)), (
        f"{len(signed)}/{len(av_vendors)} confirmés"
    )


def check_lp_confirmed(snapshot: EventSnapshot) -> CheckOutcome:
    lps = [p for p in snapshot.participants if p.role == ParticipantRole.LP]
    if not lps:
        return True, "Aucun LP invité"

    confirmed = [p for p in lps if p.rsvp_status == RsvpStatus.CONFIRMED]
    return len(confirmed) == len(lps), f"{len(confirmed)}/{len(lps)} LPs confirmés"


def check_visits_ready(snapshot: EventSnapshot) -> CheckOutcome:
    visits = snapshot.company_visits

    def is_ready(visit: CompanyVisit) -> bool:
        return bool(visit.space_confirmed and visit.deck_received and visit.run_of_show_validated)

    ready = [v for v in visits if is_ready(v)]
    return all_or_empty(visits, is_ready), f"{len(ready)}/{len(visits)} visites prêtes"


def check_transport_confirmed(snapshot: EventSnapshot) -> CheckOutcome:
    transport = [v for v in snapshot.vendors if v.category == VendorCategory.TRANSPORT]
    confirmed = next((v for v in transport if v.contract_signed), None)

    passed = not transport or confirmed is not None
    if confirmed is None:
        return passed, "Aucun transport confirmé"
    return passed, f"Confirmé: {confirmed.name}"


def check_no_blocking_tasks(snapshot: EventSnapshot) -> CheckOutcome:
    open_blocking = [
        t
        for t in _all_tasks(snapshot)
        if t.criticality == Criticality.BLOCKING and t.status != TaskStatus.DONE
    ]
    if not open_blocking:
        return True, "Aucune tâche bloquante"
    return False, f"{len(open_blocking)} tâche(s) bloquante(s) en cours"


def check_budget_ok(snapshot: EventSnapshot) -> CheckOutcome:
    planned = _to_decimal(snapshot.budget_planned)
    committed = sum(
        (_to_decimal(line.amount_committed) for line in snapshot.budget_lines),
        Decimal(0),
    )
    passed = committed <= planned * (1 + BUDGET_TOLERANCE)
    return passed, f"Engagé: {format_amount(committed)}€ / Prévu: {format_amount(planned)}€"


def check_date_selected(snapshot: EventSnapshot) -> CheckOutcome:
    if snapshot.selected_week is None:
        return False, "Aucune date sélectionnée"
    return True, f"Semaine du {format_week(snapshot.selected_week)}"


def check_meeting_rooms_ready(snapshot: EventSnapshot) -> CheckOutcome:
    room_tasks = [
        task
        for workstream in snapshot.workstreams
        if workstream.type == WorkstreamType.MEETING_ROOMS
        for task in workstream.tasks
    ]
    if not room_tasks:
        return True, "Non configuré"

    done = [t for t in room_tasks if t.status == TaskStatus.DONE]
    return len(done) == len(room_tasks), f"{len(done)}/{len(room_tasks)} tâches complétées"


# =============================================================================
# Catalog
# =============================================================================

CHECK_CATALOG: tuple[CheckDefinition, ...] = (
    CheckDefinition(
        id="visas-approved",
        label="Visas approuvés",
        description="Tous les participants nécessitant un visa doivent l'avoir obtenu",
        severity=CheckSeverity.BLOCKER,
        evaluate=check_visas_approved,
    ),
    CheckDefinition(
        id="hotel-contracted",
        label="Hôtel contracté",
        description="Au moins un hôtel doit avoir un contrat signé",
        severity=CheckSeverity.BLOCKER,
        evaluate=check_hotel_contracted,
    ),
    CheckDefinition(
        id="av-confirmed",
        label="AV & Traduction confirmés",
        description="Équipements audiovisuels et traduction doivent être confirmés",
        severity=CheckSeverity.BLOCKER,
        evaluate=check_av_confirmed,
    ),
    CheckDefinition(
        id="lp-confirmed",
        label="LPs confirmés",
        description="Tous les LPs doivent avoir confirmé leur participation",
        severity=CheckSeverity.BLOCKER,
        evaluate=check_lp_confirmed,
    ),
    CheckDefinition(
        id="visits-ready",
        label="Visites prêtes",
        description="Toutes les visites d'entreprises doivent être préparées",
        severity=CheckSeverity.WARNING,
        evaluate=check_visits_ready,
    ),
    CheckDefinition(
        id="transport-confirmed",
        label="Transport confirmé",
        description="Au moins un prestataire transport doit être confirmé",
        severity=CheckSeverity.WARNING,
        evaluate=check_transport_confirmed,
    ),
    CheckDefinition(
        id="no-blocking-tasks",
        label="Pas de tâches bloquantes",
        description="Aucune tâche critique bloquante ne doit rester ouverte",
        severity=CheckSeverity.BLOCKER,
        evaluate=check_no_blocking_tasks,
    ),
    CheckDefinition(
        id="budget-ok",
        label="Budget maîtrisé",
        description="Le budget engagé ne doit pas dépasser 110% du budget prévu",
        severity=CheckSeverity.WARNING,
        evaluate=check_budget_ok,
    ),
    CheckDefinition(
        id="date-selected",
        label="Date sélectionnée",
        description="Une semaine doit être choisie pour l'événement",
        severity=CheckSeverity.BLOCKER,
        evaluate=check_date_selected,
    ),
    CheckDefinition(
        id="meeting-rooms-ready",
        label="Salles de réunion prêtes",
        description="Configuration des salles de réunion doit être finalisée",
        severity=CheckSeverity.WARNING,
        evaluate=check_meeting_rooms_ready,
    ),
)

CHECKS_BY_ID: dict[str, CheckDefinition] = {c.id: c for c in CHECK_CATALOG}
