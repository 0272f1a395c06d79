"""Pydantic request/response schemas for the API."""

from campus_events.schemas.event import EventListResponse, EventResponse, ReviewQueueItem
from campus_events.schemas.health import HealthResponse, ReadinessResponse
from campus_events.schemas.report import (
    ReportCreateRequest,
    ReportedEventsResponse,
    ReportResponse,
    ReportStatusResponse,
)

__all__ = [
    "EventListResponse",
    "EventResponse",
    "HealthResponse",
    "ReadinessResponse",
    "ReportCreateRequest",
    "ReportResponse",
    "ReportStatusResponse",
    "ReportedEventsResponse",
    "ReviewQueueItem",
]
