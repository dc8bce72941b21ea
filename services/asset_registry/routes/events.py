"""
Outcome Event API Endpoints.

Recently published registry outcomes.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from shared.events import OutcomeEvent, OutcomeEventType, get_event_publisher


router = APIRouter(prefix="/events", tags=["events"])


@router.get(
    "/",
    response_model=list[OutcomeEvent],
    summary="List recent outcome events",
)
async def list_events(
    event_type: OutcomeEventType | None = Query(None),
    limit: int = Query(50, ge=1, le=500),
) -> list[OutcomeEvent]:
    """Recent outcome events, newest first."""
    return await get_event_publisher().recent(limit=limit, event_type=event_type)
