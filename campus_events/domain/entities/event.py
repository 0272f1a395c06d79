"""Event domain rules.

EventDetails is the validated, user-editable part of an event (text, venue,
date). EventSchedulePolicy holds the write-time date rules: office hours in
the campus zone, no past dates, bounded lead time. Neither applies at query
time.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo

from campus_events.domain.enums import Building
from campus_events.domain.exceptions import EventValidationError
from campus_events.shared.utils.datetime import ensure_utc, to_zone
from campus_events.shared.utils.sanitization import strip_html

TITLE_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 500


def parse_building(value: str | Building) -> Building:
    """Return the Building for value or raise EventValidationError."""
    if isinstance(value, Building):
        return value
    try:
        return Building(value)
    except ValueError:
        raise EventValidationError(
            f"Unknown building '{value}'. Choose one of: {', '.join(Building.values())}",
            field="building",
        ) from None


@dataclass(frozen=True)
class EventDetails:
    """Validated title, description, building, and event date.

    Title and description are stored as plain text (markup stripped).
    event_date is normalized to UTC. Validation runs on construction.
    """

    title: str
    description: str
    building: Building
    event_date: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", strip_html(self.title or ""))
        object.__setattr__(self, "description", strip_html(self.description or ""))
        object.__setattr__(self, "building", parse_building(self.building))
        object.__setattr__(self, "event_date", ensure_utc(self.event_date))
        self.validate()

    def validate(self) -> None:
        """Validate text rules. Raises EventValidationError if invalid."""
        if not self.title:
            raise EventValidationError("Please enter event title", field="title")
        if len(self.title) > TITLE_MAX_LENGTH:
            raise EventValidationError(
                f"Title must be at most {TITLE_MAX_LENGTH} characters", field="title"
            )
        if len(self.description) > DESCRIPTION_MAX_LENGTH:
            raise EventValidationError(
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
                field="description",
            )


@dataclass(frozen=True)
class EventSchedulePolicy:
    """Write-time rules for event_date.

    Attributes:
        zone: Campus timezone used for the office-hours window.
        start_hour: First allowed local hour (inclusive).
        end_hour: Local hour at which events may no longer start (exclusive).
        max_lead_days: How far ahead of now an event may be scheduled.
    """

    zone: tzinfo = UTC
    start_hour: int = 8
    end_hour: int = 18
    max_lead_days: int = 14

    def is_within_office_hours(self, event_date: datetime) -> bool:
        """Return True if event_date falls in [start_hour, end_hour) local time."""
        local = to_zone(event_date, self.zone)
        return self.start_hour <= local.hour < self.end_hour

    def validate(self, event_date: datetime, now: datetime) -> datetime:
        """Check event_date against the policy and return it normalized to UTC.

        Args:
            event_date: Requested event start.
            now: Reference instant (current time).

        Returns:
            event_date as a UTC-aware datetime.

        Raises:
            EventValidationError: If outside office hours, in the past, or too far ahead.
        """
        event_utc = ensure_utc(event_date)
        now_utc = ensure_utc(now)
        if not self.is_within_office_hours(event_utc):
            raise EventValidationError(
                f"Event time must be between {self.start_hour:02d}:00 and {self.end_hour:02d}:00",
                field="event_date",
            )
        if event_utc < now_utc:
            raise EventValidationError("Event date cannot be in the past", field="event_date")
        if event_utc > now_utc + timedelta(days=self.max_lead_days):
            raise EventValidationError(
                f"Event date must be within {self.max_lead_days} days from now",
                field="event_date",
            )
        return event_utc
