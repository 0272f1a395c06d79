"""Persistence repositories. Re-exports for dependency injection."""

from campus_events.infrastructure.persistence.repositories.base import BaseRepository
from campus_events.infrastructure.persistence.repositories.event_repo import EventRepository
from campus_events.infrastructure.persistence.repositories.report_repo import ReportRepository

__all__ = [
    "BaseRepository",
    "EventRepository",
    "ReportRepository",
]
