"""DTOs for event use cases (no dependency on ORM or presentation schemas)."""

from dataclasses import dataclass
from datetime import datetime

from campus_events.domain.enums import Building, EventStatus


@dataclass(frozen=True)
class ImageUpload:
    """Image file handed to the image store. Content is never inspected by the core."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class CreateEventCommand:
    """Input for EventService.create_event (author identity comes from the current user)."""

    title: str
    description: str
    building: Building | str
    event_date: datetime
    image: ImageUpload
    is_anonymous: bool = False


@dataclass(frozen=True)
class UpdateEventCommand:
    """Partial update; None means "leave unchanged"."""

    title: str | None = None
    description: str | None = None
    building: Building | str | None = None
    event_date: datetime | None = None
    image: ImageUpload | None = None

    def is_empty(self) -> bool:
        return all(
            v is None
            for v in (self.title, self.description, self.building, self.event_date, self.image)
        )


@dataclass(frozen=True)
class EventCreate:
    """Input for creating an event record (write-model). Use case builds this; store persists and returns EventResult."""

    title: str
    description: str
    building: Building
    event_date: datetime
    image_url: str
    author_id: str
    author_email: str
    is_anonymous: bool = False


@dataclass(frozen=True)
class EventResult:
    """Event read-model (result of get_by_id, query, insert, update)."""

    id: str
    title: str
    description: str
    building: Building
    event_date: datetime
    image_url: str | None
    author_id: str
    author_email: str
    is_anonymous: bool
    status: EventStatus
    report_count: int
    created_at: datetime

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.author_id == user_id


@dataclass(frozen=True)
class EventPage:
    """Rows for one page plus the total number of rows matching the plan's predicates."""

    rows: list[EventResult]
    total_count: int


@dataclass(frozen=True)
class EventListResult:
    """Listing returned to callers: one page of events and page metadata."""

    events: list[EventResult]
    total_count: int
    total_pages: int
    page: int
    page_size: int
