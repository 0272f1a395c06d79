"""Event operations: discovery listings and author writes (create, update, delete)."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from campus_events.application.dtos.event import (
    CreateEventCommand,
    EventCreate,
    EventListResult,
    EventResult,
    ImageUpload,
    UpdateEventCommand,
)
from campus_events.application.dtos.query import EventCriteria
from campus_events.application.services.pagination import PaginationCalculator
from campus_events.domain.entities.event import EventDetails, EventSchedulePolicy
from campus_events.domain.enums import EventStatus, ModerationTrigger
from campus_events.domain.exceptions import (
    EventValidationError,
    NotFoundError,
    PermissionDeniedError,
)
from campus_events.domain.moderation import ModerationStateMachine
from campus_events.shared.telemetry.logging import get_logger
from campus_events.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from campus_events.application.dtos.user import CurrentUser
    from campus_events.application.interfaces.repositories import IEventStore
    from campus_events.application.interfaces.services import IImageStore
    from campus_events.application.services.query_builder import EventQueryBuilder

logger = get_logger(__name__)

DEFAULT_MAX_IMAGE_BYTES = 5 * 1024 * 1024


def public_status_set(include_under_review: bool) -> frozenset[EventStatus]:
    """Statuses visible in public discovery."""
    if include_under_review:
        return frozenset({EventStatus.ACTIVE, EventStatus.UNDER_REVIEW})
    return frozenset({EventStatus.ACTIVE})


def validate_image(image: ImageUpload, max_bytes: int) -> None:
    """Raise EventValidationError unless image is a non-empty image/* file within max_bytes."""
    if not image.data:
        raise EventValidationError("Please upload an image", field="image")
    if not (image.content_type or "").lower().startswith("image/"):
        raise EventValidationError("Only image files are allowed", field="image")
    if image.size > max_bytes:
        raise EventValidationError(
            f"Image must be at most {max_bytes // (1024 * 1024)}MB", field="image"
        )


class EventService:
    """Listings and author-side writes for events.

    Text and venue rules are enforced by EventDetails; date rules by
    EventSchedulePolicy. Both run before any store or image call.
    """

    def __init__(
        self,
        event_store: IEventStore,
        image_store: IImageStore,
        query_builder: EventQueryBuilder,
        schedule_policy: EventSchedulePolicy | None = None,
        state_machine: ModerationStateMachine | None = None,
        include_under_review: bool = True,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.event_store = event_store
        self.image_store = image_store
        self.query_builder = query_builder
        self.schedule_policy = schedule_policy or EventSchedulePolicy()
        self.state_machine = state_machine or ModerationStateMachine(report_threshold=3)
        self.include_under_review = include_under_review
        self.max_image_bytes = max_image_bytes
        self.clock = clock

    async def _run_listing(self, criteria: EventCriteria) -> EventListResult:
        plan = self.query_builder.build_query(criteria, self.clock())
        page = await self.event_store.query(plan)
        info = PaginationCalculator.compute_page_info(page.total_count, criteria.page_size)
        return EventListResult(
            events=page.rows,
            total_count=info.total_count,
            total_pages=info.total_pages,
            page=criteria.page,
            page_size=criteria.page_size,
        )

    async def list_events(self, criteria: EventCriteria) -> EventListResult:
        """Public discovery: upcoming events in the configured public status set."""
        criteria = replace(
            criteria,
            status_set=public_status_set(self.include_under_review),
            author_id=None,
            upcoming_only=True,
        )
        return await self._run_listing(criteria)

    async def list_my_events(self, user_id: str, criteria: EventCriteria) -> EventListResult:
        """Author view: the user's own upcoming events in any status."""
        criteria = replace(criteria, status_set=None, author_id=user_id, upcoming_only=True)
        return await self._run_listing(criteria)

    async def get_event(self, event_id: str) -> EventResult:
        event = await self.event_store.get_by_id(event_id)
        if event is None:
            raise NotFoundError("event", event_id)
        return event

    def _ensure_can_modify(self, event: EventResult, user: CurrentUser, action: str) -> None:
        if not (event.is_owned_by(user.id) or user.is_admin):
            raise PermissionDeniedError(
                resource="event",
                action=action,
                message="Only the event author can modify this event",
            )

    async def create_event(self, command: CreateEventCommand, user: CurrentUser) -> EventResult:
        """Validate, upload the image, then insert the event as active with no reports."""
        details = EventDetails(
            title=command.title,
            description=command.description,
            building=command.building,
            event_date=command.event_date,
        )
        event_date = self.schedule_policy.validate(details.event_date, self.clock())
        validate_image(command.image, self.max_image_bytes)

        image_url = await self.image_store.upload(user.id, command.image)
        event = await self.event_store.insert(
            EventCreate(
                title=details.title,
                description=details.description,
                building=details.building,
                event_date=event_date,
                image_url=image_url,
                author_id=user.id,
                author_email=user.email,
                is_anonymous=command.is_anonymous,
            )
        )
        logger.info("Event %s created by %s", event.id, user.id)
        return event

    async def update_event(
        self, event_id: str, command: UpdateEventCommand, user: CurrentUser
    ) -> EventResult:
        """Apply a partial update. A new image replaces the old one; releasing the old image is best effort."""
        event = await self.get_event(event_id)
        self._ensure_can_modify(event, user, "update")
        if command.is_empty():
            return event

        details = EventDetails(
            title=command.title if command.title is not None else event.title,
            description=(
                command.description if command.description is not None else event.description
            ),
            building=command.building if command.building is not None else event.building,
            event_date=command.event_date if command.event_date is not None else event.event_date,
        )
        changes: dict[str, Any] = {}
        if command.title is not None:
            changes["title"] = details.title
        if command.description is not None:
            changes["description"] = details.description
        if command.building is not None:
            changes["building"] = details.building
        if command.event_date is not None:
            changes["event_date"] = self.schedule_policy.validate(
                details.event_date, self.clock()
            )
        if command.image is not None:
            validate_image(command.image, self.max_image_bytes)
            changes["image_url"] = await self.image_store.upload(event.author_id, command.image)

        updated = await self.event_store.update(event_id, changes)
        if updated is None:
            raise NotFoundError("event", event_id)

        if command.image is not None and event.image_url:
            await self._release_image(event.image_url, event_id)
        return updated

    async def delete_event(self, event_id: str, user: CurrentUser) -> None:
        """Delete the event and its reports, then release its image (best effort)."""
        event = await self.get_event(event_id)
        self._ensure_can_modify(event, user, "delete")
        self.state_machine.next_status(event.status, ModerationTrigger.OWNER_DELETED)

        if not await self.event_store.delete(event_id):
            raise NotFoundError("event", event_id)
        logger.info("Event %s deleted by %s", event_id, user.id)
        if event.image_url:
            await self._release_image(event.image_url, event_id)

    async def _release_image(self, url: str, event_id: str) -> None:
        try:
            await self.image_store.delete(url)
        except (AssertionError, AttributeError, KeyError, NameError, TypeError):
            raise
        except Exception:
            # The event change is already committed; the image is left orphaned.
            logger.warning("Failed to release image %s for event %s", url, event_id, exc_info=True)
