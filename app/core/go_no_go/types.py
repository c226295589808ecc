"""Pydantic models for go/no-go readiness evaluation."""

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CheckSeverity(str, Enum):
    """How a failed check affects go-live."""

    BLOCKER = "blocker"  # Failure prevents go-live
    WARNING = "warning"  # Failure is surfaced only


class GoNoGoCheck(BaseModel):
    """Result of one readiness check. Recomputed on every evaluation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable check key (e.g., 'visas-approved')")
    label: str = Field(..., description="Short display label")
    description: str = Field(..., description="What the check requires")
    severity: CheckSeverity = Field(..., description="blocker or warning")
    passed: bool = Field(..., description="Whether the check passed")
    details: Optional[str] = Field(None, description="Human-readable status detail")


class GoNoGoSummary(BaseModel):
    """Counts derived from a check list."""

    blockers_passed: int = Field(..., ge=0)
    blockers_total: int = Field(..., ge=0)
    warnings_passed: int = Field(..., ge=0)
    warnings_total: int = Field(..., ge=0)
    can_go_live: bool = Field(..., description="True iff every blocker passed")


class GoNoGoReport(BaseModel):
    """Checklist for one event, in catalog order."""

    event_id: UUID
    checks: list[GoNoGoCheck] = Field(default_factory=list)
    summary: GoNoGoSummary


class GoLiveDecision(BaseModel):
    """Outcome of a go-live attempt.

    ``allowed`` tells the caller whether to transition the event to LIVE.
    A refused decision carries the failing blockers for display.
    """

    event_id: UUID
    allowed: bool
    forced: bool = False
    justification: Optional[str] = None
    justification_missing: bool = Field(
        False, description="Refused because a forced go-live had no justification"
    )
    reason: Optional[str] = Field(None, description="Why the attempt was refused")
    checks: list[GoNoGoCheck] = Field(default_factory=list)
    failing_blockers: list[GoNoGoCheck] = Field(default_factory=list)
    summary: GoNoGoSummary
