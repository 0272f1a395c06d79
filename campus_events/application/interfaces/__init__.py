"""Application ports: store and collaborator protocols."""

from campus_events.application.interfaces.repositories import IEventStore, IReportStore
from campus_events.application.interfaces.services import IImageStore

__all__ = [
    "IEventStore",
    "IImageStore",
    "IReportStore",
]
