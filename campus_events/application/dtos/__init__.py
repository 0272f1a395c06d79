"""Application DTOs (no ORM dependency)."""

from campus_events.application.dtos.event import (
    CreateEventCommand,
    EventCreate,
    EventListResult,
    EventPage,
    EventResult,
    ImageUpload,
    UpdateEventCommand,
)
from campus_events.application.dtos.query import (
    EventCriteria,
    EventDateFrom,
    EventDateTo,
    FieldEquals,
    OrderBy,
    PageInfo,
    Predicate,
    QueryPlan,
    StatusIn,
    TextSearch,
)
from campus_events.application.dtos.report import (
    ReasonSummary,
    ReportCountUpdate,
    ReportCreate,
    ReportResult,
)
from campus_events.application.dtos.user import CurrentUser

__all__ = [
    "CreateEventCommand",
    "CurrentUser",
    "EventCreate",
    "EventCriteria",
    "EventDateFrom",
    "EventDateTo",
    "EventListResult",
    "EventPage",
    "EventResult",
    "FieldEquals",
    "ImageUpload",
    "OrderBy",
    "PageInfo",
    "Predicate",
    "QueryPlan",
    "ReasonSummary",
    "ReportCountUpdate",
    "ReportCreate",
    "ReportResult",
    "StatusIn",
    "TextSearch",
    "UpdateEventCommand",
]
