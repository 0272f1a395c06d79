"""Report ledger: user reports against events and the "already reported" lookups.

A report insert and the report-count increment (with its possible flip to
under_review) share one store transaction. The ledger owns a
ReportStatusCache for the lifetime of its request or session.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import TYPE_CHECKING

from campus_events.application.dtos.report import ReasonSummary, ReportCreate, ReportResult
from campus_events.application.services.report_status_cache import ReportStatusCache
from campus_events.domain.enums import ReportReason
from campus_events.domain.exceptions import (
    DuplicateReportError,
    EventValidationError,
    NotFoundError,
    OwnerCannotReportError,
)
from campus_events.shared.telemetry.logging import get_logger
from campus_events.shared.utils.sanitization import strip_html

if TYPE_CHECKING:
    from campus_events.application.interfaces.repositories import IEventStore, IReportStore
    from campus_events.domain.moderation import ModerationStateMachine

logger = get_logger(__name__)

REPORT_MESSAGE_MAX_LENGTH = 500


def parse_reason(value: ReportReason | str) -> ReportReason:
    """Return the ReportReason for value or raise EventValidationError."""
    if isinstance(value, ReportReason):
        return value
    try:
        return ReportReason(value.strip().lower())
    except ValueError:
        raise EventValidationError(
            f"Unknown report reason '{value}'. Choose one of: {', '.join(ReportReason.values())}",
            field="reason",
        ) from None


class ReportLedger:
    """Submits reports and answers has-reported checks."""

    def __init__(
        self,
        event_store: IEventStore,
        report_store: IReportStore,
        state_machine: ModerationStateMachine,
        cache: ReportStatusCache | None = None,
    ) -> None:
        self.event_store = event_store
        self.report_store = report_store
        self.state_machine = state_machine
        self.cache = cache if cache is not None else ReportStatusCache()

    async def submit_report(
        self,
        user_id: str,
        event_id: str,
        reason: ReportReason | str,
        message: str | None = None,
    ) -> ReportResult:
        """Record a report and apply the escalation rule atomically with the count increment.

        Raises:
            NotFoundError: Event does not exist.
            OwnerCannotReportError: user_id is the event's author.
            DuplicateReportError: user already reported this event.
            EventValidationError: Unknown reason or message too long.
        """
        parsed_reason = parse_reason(reason)
        clean_message = strip_html(message) if message else None
        if clean_message and len(clean_message) > REPORT_MESSAGE_MAX_LENGTH:
            raise EventValidationError(
                f"Message must be at most {REPORT_MESSAGE_MAX_LENGTH} characters",
                field="message",
            )

        event = await self.event_store.get_by_id(event_id)
        if event is None:
            raise NotFoundError("event", event_id)
        if event.is_owned_by(user_id):
            raise OwnerCannotReportError(event_id)

        try:
            report = await self.report_store.insert_report(
                ReportCreate(
                    event_id=event_id,
                    user_id=user_id,
                    reason=parsed_reason,
                    message=clean_message or None,
                )
            )
        except DuplicateReportError:
            self.cache.set((user_id, event_id), True)
            raise

        update = await self.event_store.atomic_increment_report_count(
            event_id, self.state_machine.escalation_rule()
        )
        if update is None:
            raise NotFoundError("event", event_id)
        if update.status_changed:
            logger.info(
                "Event %s moved to %s after %d reports",
                event_id,
                update.status.value,
                update.new_count,
            )

        self.cache.set((user_id, event_id), True)
        return report

    async def has_reported(self, user_id: str, event_id: str) -> bool:
        """Return True if user_id has reported event_id (cache first, then store)."""
        key = (user_id, event_id)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        result = await self.report_store.exists(user_id, event_id)
        self.cache.set(key, result)
        return result

    async def fetch_reported_ids(
        self, user_id: str, event_ids: Iterable[str] | None = None
    ) -> set[str]:
        """Return the events user_id has reported in one store call and warm the cache.

        Args:
            user_id: Reporting user.
            event_ids: Restrict the lookup to these events (e.g. one listing page).
        """
        checked = list(event_ids) if event_ids is not None else None
        reported = await self.report_store.reported_event_ids(user_id, checked)
        self.cache.warm(user_id, reported, checked)
        return reported

    async def summarize_reasons(self, event_ids: Iterable[str]) -> dict[str, ReasonSummary]:
        """Per-event breakdown of active reports by reason, with their messages."""
        ids = list(event_ids)
        if not ids:
            return {}
        reports = await self.report_store.list_active_for_events(ids)
        counts: dict[str, Counter[str]] = {event_id: Counter() for event_id in ids}
        messages: dict[str, list[str]] = {event_id: [] for event_id in ids}
        for report in reports:
            counts.setdefault(report.event_id, Counter())[report.reason.value] += 1
            if report.message:
                messages.setdefault(report.event_id, []).append(report.message)
        return {
            event_id: ReasonSummary(
                event_id=event_id,
                counts=dict(counts[event_id]),
                messages=messages.get(event_id, []),
            )
            for event_id in counts
        }
