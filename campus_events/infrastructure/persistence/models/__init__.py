"""Persistence models: ORM entities and mixins."""

from campus_events.infrastructure.persistence.models.event import Event
from campus_events.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin
from campus_events.infrastructure.persistence.models.report import EventReport

__all__ = [
    "CreatedAtMixin",
    "CuidMixin",
    "Event",
    "EventReport",
]
