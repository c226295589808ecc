"""Request/response schemas for event status transitions."""

import json
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.core.go_no_go.types import GoLiveDecision
from app.core.schemas_events import EventStatus


class TransitionRequest(BaseModel):
    """Body for ungated transitions and plain go-live."""

    user_id: Optional[UUID] = Field(None, description="User triggering the transition")


class ForceGoLiveRequest(BaseModel):
    """Body for forcing go-live past failing blockers."""

    justification: str = Field(
        "", max_length=2000, description="Why go-live is forced (required, non-blank)"
    )
    user_id: Optional[UUID] = Field(None, description="User triggering the transition")


class TransitionResponse(BaseModel):
    """Result of a successful status transition."""

    event_id: UUID
    status: EventStatus
    updated_at: Optional[datetime] = None
    decision: Optional[GoLiveDecision] = Field(
        None, description="Gate decision for go-live transitions"
    )


class AuditLogEntry(BaseModel):
    id: Optional[UUID] = None
    action: str
    entity_type: str
    entity_id: str
    user_id: Optional[UUID] = None
    changes: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None

    @field_validator("changes", mode="before")
    @classmethod
    def _parse_changes(cls, value: Any) -> Any:
        # Older rows store changes as a JSON string
        if isinstance(value, str):
            return json.loads(value) if value else None
        return value


class AuditLogResponse(BaseModel):
    event_id: UUID
    entries: list[AuditLogEntry] = Field(default_factory=list)
    total: int = 0
