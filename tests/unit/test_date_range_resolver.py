"""Unit tests for DateRangeResolver: calendar-boundary day/week/month bounds."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from campus_events.application.services.date_range_resolver import (
    DateRangeResolver,
    parse_date_range_token,
)
from campus_events.domain.enums import DateRangeToken
from campus_events.domain.exceptions import InvalidFilterError

# Saturday
NOW = datetime(2024, 6, 15, 10, 0, tzinfo=UTC)


@pytest.fixture
def resolver() -> DateRangeResolver:
    return DateRangeResolver()


def test_today_covers_the_whole_utc_day(resolver: DateRangeResolver) -> None:
    """today resolves to [00:00, 23:59:59.999] of the current day."""
    rng = resolver.resolve("today", NOW)
    assert rng is not None
    assert rng.start == datetime(2024, 6, 15, 0, 0, tzinfo=UTC)
    assert rng.end == datetime(2024, 6, 15, 23, 59, 59, 999000, tzinfo=UTC)


def test_week_runs_monday_through_sunday(resolver: DateRangeResolver) -> None:
    """week is the calendar week containing now, starting Monday."""
    rng = resolver.resolve(DateRangeToken.WEEK, NOW)
    assert rng.start == datetime(2024, 6, 10, tzinfo=UTC)
    assert rng.end == datetime(2024, 6, 16, 23, 59, 59, 999000, tzinfo=UTC)


def test_week_on_a_monday_starts_that_day(resolver: DateRangeResolver) -> None:
    """On Monday the week starts at that Monday's midnight."""
    rng = resolver.resolve("week", datetime(2024, 6, 10, 8, 30, tzinfo=UTC))
    assert rng.start == datetime(2024, 6, 10, tzinfo=UTC)


def test_week_on_a_sunday_still_starts_previous_monday(resolver: DateRangeResolver) -> None:
    """Sunday belongs to the week that started six days earlier."""
    rng = resolver.resolve("week", datetime(2024, 6, 16, 23, 0, tzinfo=UTC))
    assert rng.start == datetime(2024, 6, 10, tzinfo=UTC)
    assert rng.end == datetime(2024, 6, 16, 23, 59, 59, 999000, tzinfo=UTC)


def test_month_runs_first_through_last_day(resolver: DateRangeResolver) -> None:
    """month is the calendar month containing now."""
    rng = resolver.resolve("month", NOW)
    assert rng.start == datetime(2024, 6, 1, tzinfo=UTC)
    assert rng.end == datetime(2024, 6, 30, 23, 59, 59, 999000, tzinfo=UTC)


def test_month_rolls_over_the_year_in_december(resolver: DateRangeResolver) -> None:
    """December ends on the 31st, not in a month 13."""
    rng = resolver.resolve("month", datetime(2024, 12, 20, 9, 0, tzinfo=UTC))
    assert rng.start == datetime(2024, 12, 1, tzinfo=UTC)
    assert rng.end == datetime(2024, 12, 31, 23, 59, 59, 999000, tzinfo=UTC)


def test_month_handles_leap_february(resolver: DateRangeResolver) -> None:
    rng = resolver.resolve("month", datetime(2024, 2, 10, tzinfo=UTC))
    assert rng.end == datetime(2024, 2, 29, 23, 59, 59, 999000, tzinfo=UTC)


@pytest.mark.parametrize("token", ["all", None, "", DateRangeToken.ALL])
def test_all_and_empty_mean_no_bound(resolver: DateRangeResolver, token) -> None:
    """all (or no token) resolves to None."""
    assert resolver.resolve(token, NOW) is None


def test_tokens_are_case_and_whitespace_insensitive(resolver: DateRangeResolver) -> None:
    assert resolver.resolve("  TODAY ", NOW) == resolver.resolve("today", NOW)


def test_unknown_token_raises_invalid_filter(resolver: DateRangeResolver) -> None:
    """Tokens outside the closed set are rejected."""
    with pytest.raises(InvalidFilterError) as exc_info:
        resolver.resolve("tomorrow", NOW)
    assert exc_info.value.error_code == "INVALID_FILTER"
    assert exc_info.value.details == {"field": "date_range", "value": "tomorrow"}


def test_parse_date_range_token_returns_enum() -> None:
    assert parse_date_range_token("Month") is DateRangeToken.MONTH


def test_bounds_follow_the_campus_zone() -> None:
    """Day boundaries are local midnight in the campus zone, expressed in UTC."""
    resolver = DateRangeResolver(ZoneInfo("America/New_York"))
    # 02:00 UTC on the 15th is 22:00 EDT on the 14th.
    rng = resolver.resolve("today", datetime(2024, 6, 15, 2, 0, tzinfo=UTC))
    assert rng.start == datetime(2024, 6, 14, 4, 0, tzinfo=UTC)
    assert rng.end == datetime(2024, 6, 15, 3, 59, 59, 999000, tzinfo=UTC)


def test_month_bounds_across_a_dst_change() -> None:
    """Each boundary uses the UTC offset in force on that date."""
    resolver = DateRangeResolver(ZoneInfo("America/New_York"))
    rng = resolver.resolve("month", datetime(2024, 3, 20, 15, 0, tzinfo=UTC))
    # March 1st is EST (-5), April 1st is EDT (-4).
    assert rng.start == datetime(2024, 3, 1, 5, 0, tzinfo=UTC)
    assert rng.end == datetime(2024, 4, 1, 3, 59, 59, 999000, tzinfo=UTC)


def test_start_of_day(resolver: DateRangeResolver) -> None:
    assert resolver.start_of_day(NOW) == datetime(2024, 6, 15, tzinfo=UTC)
