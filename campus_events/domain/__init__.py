"""Domain layer: entities, value objects, enums, exceptions, moderation state machine.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from campus_events.domain.entities import EventDetails, EventSchedulePolicy
from campus_events.domain.enums import (
    ALL_BUILDINGS,
    Building,
    DateRangeToken,
    EventStatus,
    ModerationTrigger,
    ReportReason,
    SortOrder,
)
from campus_events.domain.exceptions import (
    AuthenticationError,
    CampusEventsError,
    DuplicateReportError,
    EventValidationError,
    InvalidFilterError,
    InvalidTransitionError,
    NotFoundError,
    OwnerCannotReportError,
    PermissionDeniedError,
    StoreUnavailableError,
)
from campus_events.domain.moderation import EscalationRule, ModerationStateMachine
from campus_events.domain.value_objects import DateRange

__all__ = [
    "ALL_BUILDINGS",
    "AuthenticationError",
    "Building",
    "CampusEventsError",
    "DateRange",
    "DateRangeToken",
    "DuplicateReportError",
    "EscalationRule",
    "EventDetails",
    "EventSchedulePolicy",
    "EventStatus",
    "EventValidationError",
    "InvalidFilterError",
    "InvalidTransitionError",
    "ModerationStateMachine",
    "ModerationTrigger",
    "NotFoundError",
    "OwnerCannotReportError",
    "PermissionDeniedError",
    "ReportReason",
    "SortOrder",
    "StoreUnavailableError",
]
