"""Pydantic schemas for events and the records the go/no-go checks read.

Rows come straight from the database, so nullable columns stay nullable here
and the checks normalise them (``None`` booleans are false, ``None`` amounts
are zero). Non-finite amounts (NaN, infinity) are read as zero. Collections
supplied as ``None`` become empty lists.
"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Enums
# ============================================================================


class EventStatus(str, Enum):
    """Lifecycle status of an event."""
    DRAFT = "DRAFT"
    LOCKED = "LOCKED"
    LIVE = "LIVE"
    CLOSED = "CLOSED"


class ParticipantRole(str, Enum):
    LP = "LP"
    AC_MEMBER = "AC_MEMBER"
    AB_MEMBER = "AB_MEMBER"
    IP_TEAM = "IP_TEAM"
    LOCAL_TEAM = "LOCAL_TEAM"
    ECOSYSTEM = "ECOSYSTEM"


class VisaStatus(str, Enum):
    NOT_NEEDED = "NOT_NEEDED"
    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class RsvpStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    DECLINED = "DECLINED"
    TENTATIVE = "TENTATIVE"


class WorkstreamType(str, Enum):
    """Logistics categories. Every event gets one workstream per type."""
    DATE_SELECTION = "DATE_SELECTION"
    VISA_IMMIGRATION = "VISA_IMMIGRATION"
    FLIGHTS_TRANSFERS = "FLIGHTS_TRANSFERS"
    HOTEL = "HOTEL"
    MEETING_ROOMS = "MEETING_ROOMS"
    AV_TRANSLATION = "AV_TRANSLATION"
    COMPANY_VISITS = "COMPANY_VISITS"
    GROUND_TRANSPORT = "GROUND_TRANSPORT"
    MEALS = "MEALS"
    ECOSYSTEM_EVENT = "ECOSYSTEM_EVENT"
    IT_CONNECTIVITY = "IT_CONNECTIVITY"
    SECURITY = "SECURITY"
    BUDGET_CONTRACTS = "BUDGET_CONTRACTS"
    COMMUNICATIONS = "COMMUNICATIONS"


class TaskStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    BLOCKED = "BLOCKED"
    DONE = "DONE"


class Criticality(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    BLOCKING = "BLOCKING"


class VendorCategory(str, Enum):
    HOTEL = "HOTEL"
    TRANSPORT = "TRANSPORT"
    AV_EQUIPMENT = "AV_EQUIPMENT"
    TRANSLATION = "TRANSLATION"
    RESTAURANT = "RESTAURANT"
    MEET_GREET = "MEET_GREET"
    SIM_CARDS = "SIM_CARDS"
    SECURITY = "SECURITY"
    OTHER = "OTHER"


class VendorStatus(str, Enum):
    PROSPECTING = "PROSPECTING"
    QUOTE_REQUESTED = "QUOTE_REQUESTED"
    QUOTE_RECEIVED = "QUOTE_RECEIVED"
    NEGOTIATING = "NEGOTIATING"
    CONTRACTED = "CONTRACTED"
    CANCELLED = "CANCELLED"


# ============================================================================
# Snapshot records
# ============================================================================


def _finite_or_zero(value: Optional[float]) -> Optional[float]:
    if value is not None and not math.isfinite(value):
        return 0.0
    return value


class _Record(BaseModel):
    """Immutable row; unknown columns are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Participant(_Record):
    id: Optional[UUID] = None
    name: str = ""
    organization: str = ""
    role: ParticipantRole
    needs_visa: Optional[bool] = False
    visa_status: Optional[VisaStatus] = None
    rsvp_status: Optional[RsvpStatus] = RsvpStatus.PENDING


class Vendor(_Record):
    id: Optional[UUID] = None
    name: str = ""
    category: VendorCategory
    contract_signed: Optional[bool] = False
    status: Optional[VendorStatus] = None


class Task(_Record):
    id: Optional[UUID] = None
    title: str = ""
    status: TaskStatus = TaskStatus.NOT_STARTED
    criticality: Optional[Criticality] = Criticality.MEDIUM
    workstream_id: Optional[UUID] = None


class Workstream(_Record):
    id: Optional[UUID] = None
    type: WorkstreamType
    tasks: list[Task] = Field(default_factory=list)

    @field_validator("tasks", mode="before")
    @classmethod
    def _none_tasks_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class CompanyVisit(_Record):
    id: Optional[UUID] = None
    company_name: str = ""
    space_confirmed: Optional[bool] = False
    deck_received: Optional[bool] = False
    run_of_show_validated: Optional[bool] = False


class BudgetLine(_Record):
    id: Optional[UUID] = None
    description: str = ""
    workstream_type: Optional[WorkstreamType] = None
    amount_planned: Optional[float] = 0
    amount_committed: Optional[float] = 0

    @field_validator("amount_planned", "amount_committed")
    @classmethod
    def _finite_amount(cls, value: Optional[float]) -> Optional[float]:
        return _finite_or_zero(value)


class EventSnapshot(_Record):
    """Read-only aggregate of one event and its related records."""

    id: UUID
    name: str = ""
    status: EventStatus = EventStatus.DRAFT
    selected_week: Optional[date] = None
    budget_planned: Optional[float] = 0
    locked_at: Optional[datetime] = None
    live_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    participants: list[Participant] = Field(default_factory=list)
    vendors: list[Vendor] = Field(default_factory=list)
    workstreams: list[Workstream] = Field(default_factory=list)
    company_visits: list[CompanyVisit] = Field(default_factory=list)
    budget_lines: list[BudgetLine] = Field(default_factory=list)

    @field_validator(
        "participants", "vendors", "workstreams", "company_visits", "budget_lines",
        mode="before",
    )
    @classmethod
    def _none_collection_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("budget_planned")
    @classmethod
    def _finite_budget(cls, value: Optional[float]) -> Optional[float]:
        return _finite_or_zero(value)

    @field_validator("selected_week", mode="before")
    @classmethod
    def _timestamp_to_date(cls, value: Any) -> Any:
        # selected_week is stored as a timestamp column
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value
