"""Event repository. Interprets QueryPlans and applies moderation writes. Returns application DTOs."""

from __future__ import annotations

from enum import Enum
from typing import Any

from sqlalchemy import and_, case, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from campus_events.application.dtos.event import EventCreate, EventPage, EventResult
from campus_events.application.dtos.query import (
    EventDateFrom,
    EventDateTo,
    FieldEquals,
    OrderBy,
    Predicate,
    QueryPlan,
    StatusIn,
    TextSearch,
)
from campus_events.application.dtos.report import ReportCountUpdate
from campus_events.domain.enums import Building, EventStatus
from campus_events.domain.moderation import EscalationRule
from campus_events.infrastructure.persistence.models.event import Event
from campus_events.infrastructure.persistence.models.report import EventReport
from campus_events.infrastructure.persistence.repositories.base import BaseRepository
from campus_events.shared.utils.datetime import ensure_utc

_UPDATABLE_COLUMNS = frozenset(
    {"title", "description", "building", "event_date", "image_url", "is_anonymous"}
)


def _event_to_result(e: Event) -> EventResult:
    """Map ORM Event to application EventResult."""
    return EventResult(
        id=e.id,
        title=e.title,
        description=e.description,
        building=Building(e.building),
        event_date=ensure_utc(e.event_date),
        image_url=e.image_url,
        author_id=e.author_id,
        author_email=e.author_email,
        is_anonymous=e.is_anonymous,
        status=EventStatus(e.status),
        report_count=e.report_count,
        created_at=ensure_utc(e.created_at),
    )


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _column(field: str) -> Any:
    return getattr(Event, field)


def _predicate_clause(predicate: Predicate) -> ColumnElement[bool]:
    """Translate one QueryPlan predicate into a SQL clause."""
    if isinstance(predicate, StatusIn):
        return Event.status.in_(sorted(s.value for s in predicate.statuses))
    if isinstance(predicate, FieldEquals):
        return _column(predicate.field) == predicate.value
    if isinstance(predicate, EventDateFrom):
        return Event.event_date >= ensure_utc(predicate.instant)
    if isinstance(predicate, EventDateTo):
        return Event.event_date <= ensure_utc(predicate.instant)
    if isinstance(predicate, TextSearch):
        pattern = f"%{_escape_like(predicate.term)}%"
        return or_(*(_column(f).ilike(pattern, escape="\\") for f in predicate.fields))
    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")


def _order_clause(order: OrderBy) -> Any:
    column = _column(order.field)
    return column.desc() if order.descending else column.asc()


def _db_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class EventRepository(BaseRepository[Event]):
    """SQLAlchemy event store."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Event)

    async def query(self, plan: QueryPlan) -> EventPage:
        """Return the plan's page of rows and the total count matching its predicates."""
        clauses = [_predicate_clause(p) for p in plan.predicates]
        count_stmt = select(func.count()).select_from(Event).where(*clauses)
        rows_stmt = (
            select(Event)
            .where(*clauses)
            .order_by(*(_order_clause(o) for o in plan.ordering))
            .offset(plan.offset)
        )
        if plan.limit is not None:
            rows_stmt = rows_stmt.limit(plan.limit)

        with self._translate_errors("query"):
            total = (await self.db.execute(count_stmt)).scalar_one()
            rows = (await self.db.execute(rows_stmt)).scalars().all()
        return EventPage(rows=[_event_to_result(e) for e in rows], total_count=total)

    async def get_by_id(self, event_id: str) -> EventResult | None:
        with self._translate_errors("get_by_id"):
            event = await self._get_model(event_id)
        return _event_to_result(event) if event else None

    async def insert(self, data: EventCreate) -> EventResult:
        """Create an active event with no reports."""
        event = Event(
            title=data.title,
            description=data.description,
            building=_db_value(data.building),
            event_date=ensure_utc(data.event_date),
            image_url=data.image_url,
            author_id=data.author_id,
            author_email=data.author_email,
            is_anonymous=data.is_anonymous,
            status=EventStatus.ACTIVE.value,
            report_count=0,
        )
        with self._translate_errors("insert"):
            self.db.add(event)
            await self.db.flush()
            await self.db.refresh(event)
        return _event_to_result(event)

    async def update(self, event_id: str, changes: dict[str, Any]) -> EventResult | None:
        """Apply column changes. status and report_count are not updatable here."""
        unknown = set(changes) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update event columns: {', '.join(sorted(unknown))}")
        with self._translate_errors("update"):
            event = await self._get_model(event_id)
            if event is None:
                return None
            for key, value in changes.items():
                if key == "event_date":
                    value = ensure_utc(value)
                setattr(event, key, _db_value(value))
            await self.db.flush()
            await self.db.refresh(event)
        return _event_to_result(event)

    async def delete(self, event_id: str) -> bool:
        """Delete the event and its reports."""
        with self._translate_errors("delete"):
            await self.db.execute(delete(EventReport).where(EventReport.event_id == event_id))
            result = await self.db.execute(delete(Event).where(Event.id == event_id))
        return result.rowcount > 0

    async def atomic_increment_report_count(
        self, event_id: str, rule: EscalationRule
    ) -> ReportCountUpdate | None:
        """Increment report_count and apply rule in a single UPDATE.

        The row is locked first so the previous status is known. The CASE is
        the SQL form of EscalationRule.applies on the incremented count.
        """
        flip = case(
            (
                and_(
                    Event.status == rule.from_status.value,
                    Event.report_count + 1 >= rule.threshold,
                ),
                rule.to_status.value,
            ),
            else_=Event.status,
        )
        with self._translate_errors("atomic_increment_report_count"):
            previous = (
                await self.db.execute(
                    select(Event.status).where(Event.id == event_id).with_for_update()
                )
            ).scalar_one_or_none()
            if previous is None:
                return None
            row = (
                await self.db.execute(
                    update(Event)
                    .where(Event.id == event_id)
                    .values(report_count=Event.report_count + 1, status=flip)
                    .returning(Event.report_count, Event.status)
                    .execution_options(synchronize_session=False)
                )
            ).one()
        return ReportCountUpdate(
            event_id=event_id,
            new_count=row.report_count,
            status=EventStatus(row.status),
            status_changed=row.status != previous,
        )

    async def reset_moderation(self, event_id: str) -> EventResult | None:
        """Set status active and report_count 0."""
        with self._translate_errors("reset_moderation"):
            result = await self.db.execute(
                update(Event)
                .where(Event.id == event_id)
                .values(status=EventStatus.ACTIVE.value, report_count=0)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None
            event = await self._get_model(event_id)
        return _event_to_result(event) if event else None
