"""Event API schemas."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime, tzinfo

from pydantic import AwareDatetime, BaseModel, Field

from campus_events.application.dtos.event import EventListResult, EventResult
from campus_events.domain.enums import Building, EventStatus


def localize_event_date(value: datetime, zone: tzinfo) -> datetime:
    """Naive form input is campus local time; aware input is kept as is."""
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value


class EventResponse(BaseModel):
    """Event as shown to a viewer.

    author_email is withheld for anonymous events unless the viewer is the author.
    has_reported is None for signed-out viewers.
    """

    id: str
    title: str
    description: str
    building: Building
    event_date: AwareDatetime
    image_url: str | None = None
    author_email: str | None = None
    is_anonymous: bool = False
    status: EventStatus
    report_count: int = 0
    created_at: AwareDatetime
    is_owner: bool = False
    is_under_review: bool = False
    has_reported: bool | None = None

    @classmethod
    def from_result(
        cls,
        event: EventResult,
        viewer_id: str | None = None,
        reported_ids: Collection[str] | None = None,
        show_email: bool = False,
    ) -> EventResponse:
        is_owner = event.is_owned_by(viewer_id)
        visible_email = show_email or is_owner or not event.is_anonymous
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            building=event.building,
            event_date=event.event_date,
            image_url=event.image_url,
            author_email=event.author_email if visible_email else None,
            is_anonymous=event.is_anonymous,
            status=event.status,
            report_count=event.report_count,
            created_at=event.created_at,
            is_owner=is_owner,
            is_under_review=event.status is EventStatus.UNDER_REVIEW,
            has_reported=(event.id in reported_ids) if reported_ids is not None else None,
        )


class EventListResponse(BaseModel):
    """One page of events. total_pages is 0 when nothing matches."""

    items: list[EventResponse]
    total_count: int
    total_pages: int
    page: int
    page_size: int

    @classmethod
    def from_result(
        cls,
        result: EventListResult,
        viewer_id: str | None = None,
        reported_ids: Collection[str] | None = None,
    ) -> EventListResponse:
        return cls(
            items=[
                EventResponse.from_result(e, viewer_id=viewer_id, reported_ids=reported_ids)
                for e in result.events
            ],
            total_count=result.total_count,
            total_pages=result.total_pages,
            page=result.page,
            page_size=result.page_size,
        )


class ReviewQueueItem(BaseModel):
    """Event awaiting moderation with its active report breakdown."""

    event: EventResponse
    reasons: dict[str, int] = Field(default_factory=dict)
    messages: list[str] = Field(default_factory=list)
