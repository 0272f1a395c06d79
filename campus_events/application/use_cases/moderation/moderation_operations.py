"""Admin moderation: the review queue and approve/reject decisions."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from campus_events.application.dtos.query import EventCriteria
from campus_events.domain.enums import EventStatus, ModerationTrigger, SortOrder
from campus_events.domain.exceptions import NotFoundError
from campus_events.shared.telemetry.logging import get_logger
from campus_events.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from campus_events.application.dtos.event import EventResult
    from campus_events.application.interfaces.repositories import IEventStore, IReportStore
    from campus_events.application.interfaces.services import IImageStore
    from campus_events.application.services.query_builder import EventQueryBuilder
    from campus_events.domain.moderation import ModerationStateMachine

logger = get_logger(__name__)


class ModerationService:
    """Applies admin decisions through the moderation state machine.

    Approval keeps report rows (marked dismissed) and resets the count.
    Rejection deletes the event, its reports, and its image.
    """

    def __init__(
        self,
        event_store: IEventStore,
        report_store: IReportStore,
        image_store: IImageStore,
        query_builder: EventQueryBuilder,
        state_machine: ModerationStateMachine,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.event_store = event_store
        self.report_store = report_store
        self.image_store = image_store
        self.query_builder = query_builder
        self.state_machine = state_machine
        self.clock = clock

    async def list_under_review(self) -> list[EventResult]:
        """Every event awaiting review, most reported first. Past events are included."""
        criteria = EventCriteria(
            status_set=frozenset({EventStatus.UNDER_REVIEW}),
            sort_order=SortOrder.MOST_REPORTED,
            upcoming_only=False,
            paginate=False,
        )
        plan = self.query_builder.build_query(criteria, self.clock())
        page = await self.event_store.query(plan)
        return page.rows

    async def _get_event(self, event_id: str) -> EventResult:
        event = await self.event_store.get_by_id(event_id)
        if event is None:
            raise NotFoundError("event", event_id)
        return event

    async def approve_event(self, event_id: str) -> EventResult:
        """Return an under-review event to active with a zero report count.

        Raises:
            NotFoundError: Event does not exist.
            InvalidTransitionError: Event is not under review.
        """
        event = await self._get_event(event_id)
        self.state_machine.next_status(event.status, ModerationTrigger.ADMIN_APPROVED)

        dismissed = await self.report_store.dismiss_for_event(event_id)
        approved = await self.event_store.reset_moderation(event_id)
        if approved is None:
            raise NotFoundError("event", event_id)
        logger.info("Event %s approved; %d reports dismissed", event_id, dismissed)
        return approved

    async def reject_event(self, event_id: str) -> None:
        """Delete an under-review event and release its image (best effort).

        Raises:
            NotFoundError: Event does not exist.
            InvalidTransitionError: Event is not under review.
        """
        event = await self._get_event(event_id)
        self.state_machine.next_status(event.status, ModerationTrigger.ADMIN_REJECTED)

        if not await self.event_store.delete(event_id):
            raise NotFoundError("event", event_id)
        logger.info("Event %s rejected and removed", event_id)

        if event.image_url:
            try:
                await self.image_store.delete(event.image_url)
            except (AssertionError, AttributeError, KeyError, NameError, TypeError):
                raise
            except Exception:
                logger.warning(
                    "Failed to release image %s for rejected event %s",
                    event.image_url,
                    event_id,
                    exc_info=True,
                )
