"""Report repository: the (event, user) report ledger. Returns application DTOs."""

from collections.abc import Iterable

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.application.dtos.report import ReportCreate, ReportResult
from campus_events.domain.enums import ReportReason
from campus_events.domain.exceptions import DuplicateReportError, NotFoundError
from campus_events.infrastructure.persistence.models.event import Event
from campus_events.infrastructure.persistence.models.report import EventReport
from campus_events.infrastructure.persistence.repositories.base import BaseRepository
from campus_events.shared.utils.datetime import ensure_utc, utc_now


def _report_to_result(r: EventReport) -> ReportResult:
    """Map ORM EventReport to application ReportResult."""
    return ReportResult(
        id=r.id,
        event_id=r.event_id,
        user_id=r.user_id,
        reason=ReportReason(r.reason),
        message=r.message,
        created_at=ensure_utc(r.created_at),
        dismissed_at=ensure_utc(r.dismissed_at) if r.dismissed_at else None,
    )


class ReportRepository(BaseRepository[EventReport]):
    """SQLAlchemy report store. Dismissed reports still count for duplicate checks."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EventReport)

    async def insert_report(self, data: ReportCreate) -> ReportResult:
        """Insert a report.

        Runs in a savepoint so a constraint violation leaves the surrounding
        transaction usable.

        Raises:
            DuplicateReportError: (event_id, user_id) already exists.
            NotFoundError: The event row is gone (foreign key violation).
        """
        report = EventReport(
            event_id=data.event_id,
            user_id=data.user_id,
            reason=data.reason.value,
            message=data.message,
        )
        with self._translate_errors("insert_report"):
            try:
                async with self.db.begin_nested():
                    self.db.add(report)
                    await self.db.flush()
            except IntegrityError as exc:
                if not await self._event_exists(data.event_id):
                    raise NotFoundError("event", data.event_id) from exc
                raise DuplicateReportError(data.event_id, data.user_id) from exc
        return _report_to_result(report)

    async def _event_exists(self, event_id: str) -> bool:
        stmt = select(Event.id).where(Event.id == event_id)
        return (await self.db.execute(stmt)).scalar_one_or_none() is not None

    async def exists(self, user_id: str, event_id: str) -> bool:
        stmt = (
            select(EventReport.id)
            .where(EventReport.user_id == user_id, EventReport.event_id == event_id)
            .limit(1)
        )
        with self._translate_errors("exists"):
            found = (await self.db.execute(stmt)).scalar_one_or_none()
        return found is not None

    async def reported_event_ids(
        self, user_id: str, event_ids: Iterable[str] | None = None
    ) -> set[str]:
        """Return ids of events reported by user_id in one query."""
        stmt = select(EventReport.event_id).where(EventReport.user_id == user_id)
        if event_ids is not None:
            ids = list(event_ids)
            if not ids:
                return set()
            stmt = stmt.where(EventReport.event_id.in_(ids))
        with self._translate_errors("reported_event_ids"):
            rows = (await self.db.execute(stmt)).scalars().all()
        return set(rows)

    async def dismiss_for_event(self, event_id: str) -> int:
        """Stamp dismissed_at on the event's active reports; rows are kept."""
        stmt = (
            update(EventReport)
            .where(EventReport.event_id == event_id, EventReport.dismissed_at.is_(None))
            .values(dismissed_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        with self._translate_errors("dismiss_for_event"):
            result = await self.db.execute(stmt)
        return result.rowcount

    async def list_active_for_events(self, event_ids: Iterable[str]) -> list[ReportResult]:
        ids = list(event_ids)
        if not ids:
            return []
        stmt = (
            select(EventReport)
            .where(EventReport.event_id.in_(ids), EventReport.dismissed_at.is_(None))
            .order_by(EventReport.created_at, EventReport.id)
        )
        with self._translate_errors("list_active_for_events"):
            rows = (await self.db.execute(stmt)).scalars().all()
        return [_report_to_result(r) for r in rows]
