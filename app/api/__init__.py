"""API router for v1 endpoints."""

from fastapi import APIRouter

from app.api import events

router = APIRouter()

# Go/no-go readiness and event status transitions
router.include_router(events.router, tags=["events"])
