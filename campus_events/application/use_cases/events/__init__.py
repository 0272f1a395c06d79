"""Event use cases: discovery listings and author writes."""

from campus_events.application.use_cases.events.event_operations import EventService

__all__ = ["EventService"]
