"""Unit tests for EventQueryBuilder (criteria -> QueryPlan)."""

from datetime import UTC, datetime

import pytest

from campus_events.application.dtos.query import (
    EventCriteria,
    EventDateFrom,
    EventDateTo,
    FieldEquals,
    OrderBy,
    StatusIn,
    TextSearch,
)
from campus_events.application.services import DateRangeResolver, EventQueryBuilder
from campus_events.domain.enums import EventStatus, SortOrder
from campus_events.domain.exceptions import InvalidFilterError

NOW = datetime(2024, 6, 15, 10, 0, tzinfo=UTC)
START_OF_TODAY = datetime(2024, 6, 15, tzinfo=UTC)


@pytest.fixture
def builder() -> EventQueryBuilder:
    return EventQueryBuilder(DateRangeResolver(), max_page_size=100)


def test_default_criteria_build_visible_upcoming_plan(builder: EventQueryBuilder) -> None:
    """Defaults: public statuses, date floor at start of today, soonest first, first page."""
    plan = builder.build_query(EventCriteria(), NOW)

    assert plan.find(StatusIn) == [
        StatusIn(frozenset({EventStatus.ACTIVE, EventStatus.UNDER_REVIEW}))
    ]
    assert plan.find(EventDateFrom) == [EventDateFrom(START_OF_TODAY)]
    assert plan.find(EventDateTo) == []
    assert plan.find(FieldEquals) == []
    assert plan.find(TextSearch) == []
    assert plan.ordering == (OrderBy("event_date"), OrderBy("id"))
    assert (plan.offset, plan.limit) == (0, 12)


@pytest.mark.parametrize("building", ["All", "all", " ALL ", ""])
def test_all_buildings_adds_no_building_predicate(
    builder: EventQueryBuilder, building: str
) -> None:
    plan = builder.build_query(EventCriteria(building=building), NOW)
    assert plan.find(FieldEquals) == []


def test_specific_building_is_an_exact_match(builder: EventQueryBuilder) -> None:
    plan = builder.build_query(EventCriteria(building="Food Court"), NOW)
    assert plan.find(FieldEquals) == [FieldEquals("building", "Food Court")]


def test_search_term_is_trimmed_and_matches_title_or_description(
    builder: EventQueryBuilder,
) -> None:
    """Non-empty search becomes one OR clause over title and description."""
    plan = builder.build_query(EventCriteria(search_text="  jazz  "), NOW)
    assert plan.find(TextSearch) == [TextSearch("jazz", ("title", "description"))]


def test_blank_search_adds_no_predicate(builder: EventQueryBuilder) -> None:
    plan = builder.build_query(EventCriteria(search_text="   "), NOW)
    assert plan.find(TextSearch) == []


def test_date_range_is_combined_with_the_floor(builder: EventQueryBuilder) -> None:
    """Range bounds are applied in addition to the start-of-today floor."""
    plan = builder.build_query(EventCriteria(date_range="week"), NOW)
    assert plan.find(EventDateFrom) == [
        EventDateFrom(START_OF_TODAY),
        EventDateFrom(datetime(2024, 6, 10, tzinfo=UTC)),
    ]
    assert plan.find(EventDateTo) == [
        EventDateTo(datetime(2024, 6, 16, 23, 59, 59, 999000, tzinfo=UTC))
    ]


def test_upcoming_only_false_drops_the_floor(builder: EventQueryBuilder) -> None:
    plan = builder.build_query(EventCriteria(upcoming_only=False), NOW)
    assert plan.find(EventDateFrom) == []


def test_owner_view_has_author_and_no_status_predicate(builder: EventQueryBuilder) -> None:
    plan = builder.build_query(EventCriteria(status_set=None, author_id="u-1"), NOW)
    assert plan.find(StatusIn) == []
    assert plan.find(FieldEquals) == [FieldEquals("author_id", "u-1")]


def test_page_window(builder: EventQueryBuilder) -> None:
    """page 2 of size 4 starts at offset 4."""
    plan = builder.build_query(EventCriteria(page=2, page_size=4), NOW)
    assert (plan.offset, plan.limit) == (4, 4)


def test_unpaginated_plan_has_no_window(builder: EventQueryBuilder) -> None:
    """paginate=False returns every row; page and page_size are not checked."""
    plan = builder.build_query(EventCriteria(paginate=False, page=3, page_size=500), NOW)
    assert (plan.offset, plan.limit) == (0, None)


def test_most_reported_ordering(builder: EventQueryBuilder) -> None:
    plan = builder.build_query(EventCriteria(sort_order=SortOrder.MOST_REPORTED), NOW)
    assert plan.ordering == (
        OrderBy("report_count", descending=True),
        OrderBy("event_date"),
        OrderBy("id"),
    )


@pytest.mark.parametrize(
    "criteria",
    [
        EventCriteria(date_range="next-year"),
        EventCriteria(page_size=0),
        EventCriteria(page_size=-3),
        EventCriteria(page=0),
        EventCriteria(page_size=101),
    ],
)
def test_invalid_criteria_fail_fast(builder: EventQueryBuilder, criteria: EventCriteria) -> None:
    """Malformed criteria raise InvalidFilterError before any plan exists."""
    with pytest.raises(InvalidFilterError):
        builder.build_query(criteria, NOW)


def test_plan_is_immutable(builder: EventQueryBuilder) -> None:
    plan = builder.build_query(EventCriteria(), NOW)
    with pytest.raises(AttributeError):
        plan.offset = 10  # type: ignore[misc]
