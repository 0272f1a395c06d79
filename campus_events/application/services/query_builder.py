"""Compose listing criteria into a declarative QueryPlan.

Validation happens here, before any store call: an invalid date token,
page, or page size fails fast with InvalidFilterError.
"""

from __future__ import annotations

from datetime import datetime

from campus_events.application.dtos.query import (
    EventCriteria,
    EventDateFrom,
    EventDateTo,
    FieldEquals,
    OrderBy,
    Predicate,
    QueryPlan,
    StatusIn,
    TextSearch,
)
from campus_events.application.services.date_range_resolver import DateRangeResolver
from campus_events.application.services.pagination import PaginationCalculator
from campus_events.domain.enums import ALL_BUILDINGS, SortOrder

_ORDERINGS: dict[SortOrder, tuple[OrderBy, ...]] = {
    SortOrder.SOONEST_FIRST: (OrderBy("event_date"), OrderBy("id")),
    SortOrder.MOST_REPORTED: (
        OrderBy("report_count", descending=True),
        OrderBy("event_date"),
        OrderBy("id"),
    ),
}


class EventQueryBuilder:
    """Builds QueryPlans from EventCriteria.

    Date filtering has two layers applied conjunctively: a floor at the start
    of today (when upcoming_only) and the optional range from DateRangeResolver.
    """

    def __init__(
        self,
        date_resolver: DateRangeResolver,
        max_page_size: int | None = None,
    ) -> None:
        self.date_resolver = date_resolver
        self.max_page_size = max_page_size

    def build_query(self, criteria: EventCriteria, now: datetime) -> QueryPlan:
        """Return the plan for criteria evaluated at now.

        Raises:
            InvalidFilterError: Bad date token, page < 1, or page_size <= 0.
        """
        if criteria.paginate:
            PaginationCalculator.validate(criteria.page, criteria.page_size, self.max_page_size)
        date_range = self.date_resolver.resolve(criteria.date_range, now)

        predicates: list[Predicate] = []
        if criteria.status_set is not None:
            predicates.append(StatusIn(frozenset(criteria.status_set)))
        if criteria.author_id is not None:
            predicates.append(FieldEquals("author_id", criteria.author_id))

        building = (criteria.building or ALL_BUILDINGS).strip()
        if building.lower() != ALL_BUILDINGS.lower():
            predicates.append(FieldEquals("building", building))

        if criteria.upcoming_only:
            predicates.append(EventDateFrom(self.date_resolver.start_of_day(now)))
        if date_range is not None:
            predicates.append(EventDateFrom(date_range.start))
            predicates.append(EventDateTo(date_range.end))

        term = (criteria.search_text or "").strip()
        if term:
            predicates.append(TextSearch(term))

        offset, limit = 0, None
        if criteria.paginate:
            offset, limit = PaginationCalculator.page_window(criteria.page, criteria.page_size)
        return QueryPlan(
            predicates=tuple(predicates),
            ordering=_ORDERINGS[criteria.sort_order],
            offset=offset,
            limit=limit,
        )
