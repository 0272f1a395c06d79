"""Report API: submit a report and has-reported lookups. Thin routes delegating to ReportLedger."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from campus_events.api.v1.dependencies import (
    get_current_user,
    get_report_ledger,
    get_report_ledger_for_write,
)
from campus_events.application.dtos.user import CurrentUser
from campus_events.application.use_cases import ReportLedger
from campus_events.core.limiter import limit_reports
from campus_events.schemas.report import (
    ReportCreateRequest,
    ReportedEventsResponse,
    ReportResponse,
    ReportStatusResponse,
)

router = APIRouter()


@router.post("/events/{event_id}/reports", response_model=ReportResponse, status_code=201)
@limit_reports
async def submit_report(
    request: Request,
    event_id: str,
    body: ReportCreateRequest,
    ledger: Annotated[ReportLedger, Depends(get_report_ledger_for_write)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
):
    """Report an event. 403 for the author, 409 if already reported."""
    report = await ledger.submit_report(current_user.id, event_id, body.reason, body.message)
    return ReportResponse.model_validate(report)


@router.get("/events/{event_id}/reports/me", response_model=ReportStatusResponse)
async def has_reported(
    event_id: str,
    ledger: Annotated[ReportLedger, Depends(get_report_ledger)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
):
    return ReportStatusResponse(
        event_id=event_id,
        has_reported=await ledger.has_reported(current_user.id, event_id),
    )


@router.get("/reports/mine", response_model=ReportedEventsResponse)
async def reported_events(
    ledger: Annotated[ReportLedger, Depends(get_report_ledger)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
):
    """Ids of every event the signed-in user has reported (one query)."""
    ids = await ledger.fetch_reported_ids(current_user.id)
    return ReportedEventsResponse(event_ids=sorted(ids))
