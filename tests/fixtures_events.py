"""Shared event snapshot builders for go/no-go tests."""

from datetime import date
from uuid import UUID

from app.core.schemas_events import (
    BudgetLine,
    CompanyVisit,
    Criticality,
    EventSnapshot,
    EventStatus,
    Participant,
    ParticipantRole,
    RsvpStatus,
    Task,
    TaskStatus,
    Vendor,
    VendorCategory,
    VisaStatus,
    Workstream,
    WorkstreamType,
)

EVENT_ID = UUID("5b1f0c1e-8a4d-4f7e-9c61-2d3e4f5a6b7c")
SELECTED_WEEK = date(2025, 3, 10)


def participant(
    role: ParticipantRole = ParticipantRole.AC_MEMBER,
    needs_visa: bool | None = False,
    visa_status: VisaStatus | None = None,
    rsvp_status: RsvpStatus | None = RsvpStatus.CONFIRMED,
    name: str = "Participant",
) -> Participant:
    return Participant(
        name=name,
        role=role,
        needs_visa=needs_visa,
        visa_status=visa_status,
        rsvp_status=rsvp_status,
    )


def vendor(category: VendorCategory, contract_signed: bool | None = True, name: str = "Vendor") -> Vendor:
    return Vendor(name=name, category=category, contract_signed=contract_signed)


def task(
    status: TaskStatus = TaskStatus.DONE,
    criticality: Criticality | None = Criticality.MEDIUM,
    title: str = "Task",
) -> Task:
    return Task(title=title, status=status, criticality=criticality)


def workstream(type_: WorkstreamType, tasks: list[Task] | None = None) -> Workstream:
    return Workstream(type=type_, tasks=tasks or [])


def visit(ready: bool = True, company_name: str = "Portfolio Co") -> CompanyVisit:
    return CompanyVisit(
        company_name=company_name,
        space_confirmed=ready,
        deck_received=ready,
        run_of_show_validated=ready,
    )


def ready_snapshot(**overrides) -> EventSnapshot:
    """A LOCKED event on which every check passes."""
    data = {
        "id": EVENT_ID,
        "name": "AC Abidjan 2025",
        "status": EventStatus.LOCKED,
        "selected_week": SELECTED_WEEK,
        "budget_planned": 10000,
        "participants": [
            participant(ParticipantRole.LP, needs_visa=True, visa_status=VisaStatus.APPROVED),
            participant(ParticipantRole.AC_MEMBER),
        ],
        "vendors": [
            vendor(VendorCategory.HOTEL, name="Sofitel Ivoire"),
            vendor(VendorCategory.TRANSPORT, name="Abidjan Cars"),
            vendor(VendorCategory.AV_EQUIPMENT, name="SonoPro"),
        ],
        "workstreams": [
            workstream(WorkstreamType.MEETING_ROOMS, [task(), task()]),
            workstream(WorkstreamType.HOTEL, [task(criticality=Criticality.BLOCKING)]),
        ],
        "company_visits": [visit()],
        "budget_lines": [BudgetLine(amount_committed=6000), BudgetLine(amount_committed=2500)],
    }
    data.update(overrides)
    return EventSnapshot(**data)


def empty_snapshot(**overrides) -> EventSnapshot:
    """An event with no related records at all."""
    data = {"id": EVENT_ID, "status": EventStatus.LOCKED}
    data.update(overrides)
    return EventSnapshot(**data)
