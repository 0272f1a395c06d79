"""Moderation API (admin only): review queue, approve, reject."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from campus_events.api.v1.dependencies import (
    get_moderation_service,
    get_report_ledger_for_write,
    require_admin,
)
from campus_events.application.dtos.user import CurrentUser
from campus_events.application.use_cases import ModerationService, ReportLedger
from campus_events.core.limiter import limit_writes
from campus_events.schemas.event import EventResponse, ReviewQueueItem

router = APIRouter()


@router.get("/queue", response_model=list[ReviewQueueItem])
async def review_queue(
    moderation_svc: Annotated[ModerationService, Depends(get_moderation_service)],
    ledger: Annotated[ReportLedger, Depends(get_report_ledger_for_write)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
):
    """Events under review, most reported first, with per-reason report counts."""
    events = await moderation_svc.list_under_review()
    summaries = await ledger.summarize_reasons(e.id for e in events)
    items = []
    for event in events:
        summary = summaries.get(event.id)
        items.append(
            ReviewQueueItem(
                event=EventResponse.from_result(event, viewer_id=admin.id, show_email=True),
                reasons=summary.counts if summary else {},
                messages=summary.messages if summary else [],
            )
        )
    return items


@router.post("/{event_id}/approve", response_model=EventResponse)
@limit_writes
async def approve_event(
    request: Request,
    event_id: str,
    moderation_svc: Annotated[ModerationService, Depends(get_moderation_service)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
):
    """Return an under-review event to active and reset its report count."""
    approved = await moderation_svc.approve_event(event_id)
    return EventResponse.from_result(approved, viewer_id=admin.id, show_email=True)


@router.post("/{event_id}/reject", status_code=204)
@limit_writes
async def reject_event(
    request: Request,
    event_id: str,
    moderation_svc: Annotated[ModerationService, Depends(get_moderation_service)],
    _: Annotated[CurrentUser, Depends(require_admin)],
):
    """Remove an under-review event and its image."""
    await moderation_svc.reject_event(event_id)
    return Response(status_code=204)
