"""Declarative query plan for event listings.

EventQueryBuilder produces a QueryPlan; store adapters interpret it. A plan
never executes itself. Predicates combine conjunctively; TextSearch is the
only clause with OR semantics (across its fields).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, TypeAlias

from campus_events.domain.enums import (
    ALL_BUILDINGS,
    DateRangeToken,
    EventStatus,
    SortOrder,
)

EventField = Literal[
    "id",
    "title",
    "description",
    "building",
    "author_id",
    "event_date",
    "report_count",
    "created_at",
]


@dataclass(frozen=True)
class StatusIn:
    """status is one of statuses."""

    statuses: frozenset[EventStatus]


@dataclass(frozen=True)
class FieldEquals:
    """Exact match on a scalar field (building, author_id)."""

    field: EventField
    value: str


@dataclass(frozen=True)
class EventDateFrom:
    """event_date >= instant."""

    instant: datetime


@dataclass(frozen=True)
class EventDateTo:
    """event_date <= instant."""

    instant: datetime


@dataclass(frozen=True)
class TextSearch:
    """Case-insensitive substring match on ANY of fields. term is literal (no wildcards)."""

    term: str
    fields: tuple[EventField, ...] = ("title", "description")


Predicate: TypeAlias = StatusIn | FieldEquals | EventDateFrom | EventDateTo | TextSearch


@dataclass(frozen=True)
class OrderBy:
    field: EventField
    descending: bool = False


@dataclass(frozen=True)
class QueryPlan:
    """Immutable description of predicates, ordering, and the page window."""

    predicates: tuple[Predicate, ...]
    ordering: tuple[OrderBy, ...]
    offset: int = 0
    limit: int | None = None

    def find(self, kind: type) -> list[Predicate]:
        """Return predicates of the given clause type (used by adapters and tests)."""
        return [p for p in self.predicates if isinstance(p, kind)]


@dataclass(frozen=True)
class EventCriteria:
    """Caller-supplied listing filters.

    Attributes:
        status_set: Visible statuses; None means no status predicate (owner view).
        building: Venue or the "All" sentinel.
        date_range: all | today | week | month (str accepted and validated by the builder).
        search_text: Free text matched against title OR description.
        page: 1-indexed page number.
        page_size: Rows per page (> 0).
        author_id: Restrict to one author ("my events").
        sort_order: Fixed to SOONEST_FIRST for discovery.
        upcoming_only: Exclude events before the start of today.
        paginate: False returns every matching row (page and page_size ignored).
    """

    status_set: frozenset[EventStatus] | None = field(
        default_factory=lambda: frozenset({EventStatus.ACTIVE, EventStatus.UNDER_REVIEW})
    )
    building: str = ALL_BUILDINGS
    date_range: DateRangeToken | str = DateRangeToken.ALL
    search_text: str = ""
    page: int = 1
    page_size: int = 12
    author_id: str | None = None
    sort_order: SortOrder = SortOrder.SOONEST_FIRST
    upcoming_only: bool = True
    paginate: bool = True


@dataclass(frozen=True)
class PageInfo:
    """Page metadata derived from a total count. total_pages is 0 when there are no rows."""

    total_count: int
    page_size: int
    total_pages: int
