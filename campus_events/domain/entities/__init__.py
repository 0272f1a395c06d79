"""Domain entities and write-time rules.

Pure domain models; no ORM or persistence concerns.
"""

from campus_events.domain.entities.event import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    EventDetails,
    EventSchedulePolicy,
    parse_building,
)

__all__ = [
    "DESCRIPTION_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "EventDetails",
    "EventSchedulePolicy",
    "parse_building",
]
