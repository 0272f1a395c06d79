"""Resolve symbolic date-range tokens into concrete UTC bounds.

Bounds follow calendar boundaries in the campus zone:

- today: [00:00, 23:59:59.999] of the current day
- week:  Monday 00:00 through Sunday 23:59:59.999 of the current ISO week
- month: the 1st 00:00 through the last day 23:59:59.999 of the current month

Rolling windows ("now + 7 days", "now + 30 days") are not used; the labels
shown to users are "This Week" / "This Month".
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, tzinfo

from campus_events.domain.enums import DateRangeToken
from campus_events.domain.exceptions import InvalidFilterError
from campus_events.domain.value_objects import DateRange
from campus_events.shared.utils.datetime import to_zone

# Closed intervals end one millisecond before the next boundary.
_END_EPSILON = timedelta(milliseconds=1)


def parse_date_range_token(value: DateRangeToken | str | None) -> DateRangeToken:
    """Return the token for value; None and "" mean ALL.

    Raises:
        InvalidFilterError: If value is not in the closed set.
    """
    if value is None or value == "":
        return DateRangeToken.ALL
    if isinstance(value, DateRangeToken):
        return value
    try:
        return DateRangeToken(value.strip().lower())
    except ValueError:
        raise InvalidFilterError(
            f"Unknown date range '{value}'. Use one of: "
            + ", ".join(t.value for t in DateRangeToken),
            field="date_range",
            value=value,
        ) from None


class DateRangeResolver:
    """Pure function of (token, now) parameterized by the campus timezone."""

    def __init__(self, zone: tzinfo = UTC) -> None:
        self.zone = zone

    def _local_midnight(self, now: datetime) -> datetime:
        local = to_zone(now, self.zone)
        return local.replace(hour=0, minute=0, second=0, microsecond=0)

    def _to_utc(self, local: datetime) -> datetime:
        # Re-attach the zone so DST offsets are computed for the boundary date itself.
        return local.replace(tzinfo=None).replace(tzinfo=self.zone).astimezone(UTC)

    def start_of_day(self, now: datetime) -> datetime:
        """Return local midnight of now's day as a UTC instant."""
        return self._to_utc(self._local_midnight(now))

    def resolve(self, token: DateRangeToken | str | None, now: datetime) -> DateRange | None:
        """Return [start, end] for token, or None for ALL.

        Args:
            token: all | today | week | month.
            now: Reference instant.

        Returns:
            DateRange with UTC bounds, or None when no bound applies.

        Raises:
            InvalidFilterError: If token is not in the closed set.
        """
        parsed = parse_date_range_token(token)
        if parsed is DateRangeToken.ALL:
            return None

        midnight = self._local_midnight(now)
        if parsed is DateRangeToken.TODAY:
            start = midnight
            next_start = midnight + timedelta(days=1)
        elif parsed is DateRangeToken.WEEK:
            start = midnight - timedelta(days=midnight.weekday())
            next_start = start + timedelta(days=7)
        else:
            start = midnight.replace(day=1)
            if start.month == 12:
                next_start = start.replace(year=start.year + 1, month=1)
            else:
                next_start = start.replace(month=start.month + 1)

        return DateRange(
            start=self._to_utc(start),
            end=self._to_utc(next_start) - _END_EPSILON,
        )
