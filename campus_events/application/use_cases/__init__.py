"""Application use cases: one entry point per workflow."""

from campus_events.application.use_cases.events import EventService
from campus_events.application.use_cases.moderation import ModerationService
from campus_events.application.use_cases.reports import ReportLedger

__all__ = [
    "EventService",
    "ModerationService",
    "ReportLedger",
]
