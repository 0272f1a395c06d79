"""Event API: discovery listings and author writes. Thin routes delegating to EventService."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, Response, UploadFile

from campus_events.api.v1.dependencies import (
    get_current_user,
    get_current_user_optional,
    get_event_service,
    get_event_service_for_write,
    get_report_ledger,
)
from campus_events.application.dtos.event import (
    CreateEventCommand,
    ImageUpload,
    UpdateEventCommand,
)
from campus_events.application.dtos.query import EventCriteria
from campus_events.application.dtos.user import CurrentUser
from campus_events.application.use_cases import EventService, ReportLedger
from campus_events.core.config import Settings, get_settings
from campus_events.core.limiter import limit_upload, limit_writes
from campus_events.domain.enums import ALL_BUILDINGS
from campus_events.schemas.event import EventListResponse, EventResponse, localize_event_date
from campus_events.shared.utils.datetime import get_zone

router = APIRouter()


async def _read_image(file: UploadFile, settings: Settings) -> ImageUpload:
    # One byte over the limit is enough for the size check to fail.
    data = await file.read(settings.max_image_bytes + 1)
    return ImageUpload(
        filename=file.filename or "",
        content_type=file.content_type or "application/octet-stream",
        data=data,
    )


def _criteria(
    settings: Settings,
    building: str,
    date_range: str,
    search: str,
    page: int,
    page_size: int | None,
) -> EventCriteria:
    return EventCriteria(
        building=building,
        date_range=date_range,
        search_text=search,
        page=page,
        page_size=page_size if page_size is not None else settings.default_page_size,
    )


@router.get("", response_model=EventListResponse)
async def list_events(
    event_svc: Annotated[EventService, Depends(get_event_service)],
    ledger: Annotated[ReportLedger, Depends(get_report_ledger)],
    settings: Annotated[Settings, Depends(get_settings)],
    current_user: Annotated[CurrentUser | None, Depends(get_current_user_optional)],
    building: str = Query(ALL_BUILDINGS),
    date_range: str = Query("all"),
    search: str = Query("", max_length=200),
    page: int = Query(1),
    page_size: int | None = Query(None),
):
    """Public discovery: upcoming events, soonest first. Signed-in viewers get has_reported flags."""
    result = await event_svc.list_events(
        _criteria(settings, building, date_range, search, page, page_size)
    )
    viewer_id = current_user.id if current_user else None
    reported = None
    if current_user is not None:
        reported = await ledger.fetch_reported_ids(
            current_user.id, [e.id for e in result.events]
        )
    return EventListResponse.from_result(result, viewer_id=viewer_id, reported_ids=reported)


@router.get("/mine", response_model=EventListResponse)
async def list_my_events(
    event_svc: Annotated[EventService, Depends(get_event_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    building: str = Query(ALL_BUILDINGS),
    date_range: str = Query("all"),
    search: str = Query("", max_length=200),
    page: int = Query(1),
    page_size: int | None = Query(None),
):
    """The signed-in user's upcoming events in any moderation status."""
    result = await event_svc.list_my_events(
        current_user.id, _criteria(settings, building, date_range, search, page, page_size)
    )
    return EventListResponse.from_result(result, viewer_id=current_user.id)


@router.post("", response_model=EventResponse, status_code=201)
@limit_upload
async def create_event(
    request: Request,
    event_svc: Annotated[EventService, Depends(get_event_service_for_write)],
    settings: Annotated[Settings, Depends(get_settings)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    title: str = Form(...),
    building: str = Form(...),
    event_date: datetime = Form(...),
    description: str = Form(""),
    is_anonymous: bool = Form(False),
    image: UploadFile = File(...),
):
    """Create an event (multipart: fields + image). Naive event_date is campus local time."""
    command = CreateEventCommand(
        title=title,
        description=description,
        building=building,
        event_date=localize_event_date(event_date, get_zone(settings.campus_timezone)),
        image=await _read_image(image, settings),
        is_anonymous=is_anonymous,
    )
    created = await event_svc.create_event(command, current_user)
    return EventResponse.from_result(created, viewer_id=current_user.id)


@router.patch("/{event_id}", response_model=EventResponse)
@limit_writes
async def update_event(
    request: Request,
    event_id: str,
    event_svc: Annotated[EventService, Depends(get_event_service_for_write)],
    settings: Annotated[Settings, Depends(get_settings)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    title: str | None = Form(None),
    building: str | None = Form(None),
    event_date: datetime | None = Form(None),
    description: str | None = Form(None),
    image: UploadFile | None = File(None),
):
    """Partially update an event (author or admin). A new image replaces the old one."""
    command = UpdateEventCommand(
        title=title,
        description=description,
        building=building,
        event_date=(
            localize_event_date(event_date, get_zone(settings.campus_timezone))
            if event_date is not None
            else None
        ),
        image=await _read_image(image, settings) if image is not None else None,
    )
    updated = await event_svc.update_event(event_id, command, current_user)
    return EventResponse.from_result(updated, viewer_id=current_user.id)


@router.delete("/{event_id}", status_code=204)
@limit_writes
async def delete_event(
    request: Request,
    event_id: str,
    event_svc: Annotated[EventService, Depends(get_event_service_for_write)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
):
    """Delete an event (author or admin) and release its image."""
    await event_svc.delete_event(event_id, current_user)
    return Response(status_code=204)
