"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.

Both stores share one transactional session per request: a report insert
and the report-count increment commit or roll back together.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from campus_events.application.dtos.event import EventCreate, EventPage, EventResult
    from campus_events.application.dtos.query import QueryPlan
    from campus_events.application.dtos.report import (
        ReportCountUpdate,
        ReportCreate,
        ReportResult,
    )
    from campus_events.domain.moderation import EscalationRule


class IEventStore(Protocol):
    """Protocol for the event store (DIP)."""

    async def query(self, plan: QueryPlan) -> EventPage:
        """Execute plan; return one page of rows and the total matching count."""

    async def get_by_id(self, event_id: str) -> EventResult | None:
        """Return event by ID."""

    async def insert(self, data: EventCreate) -> EventResult:
        """Create an event (status active, report_count 0)."""

    async def update(self, event_id: str, changes: dict[str, Any]) -> EventResult | None:
        """Apply column changes; return updated event or None if not found."""

    async def delete(self, event_id: str) -> bool:
        """Delete event (and its reports); return False if not found."""

    async def atomic_increment_report_count(
        self, event_id: str, rule: EscalationRule
    ) -> ReportCountUpdate | None:
        """Increment report_count and apply rule in one statement; None if event missing."""

    async def reset_moderation(self, event_id: str) -> EventResult | None:
        """Set status active and report_count 0 (admin approval)."""


class IReportStore(Protocol):
    """Protocol for the report ledger store (DIP)."""

    async def insert_report(self, data: ReportCreate) -> ReportResult:
        """Insert report; raise DuplicateReportError if (event_id, user_id) exists."""

    async def exists(self, user_id: str, event_id: str) -> bool:
        """Return True if user has reported event."""

    async def reported_event_ids(
        self, user_id: str, event_ids: Iterable[str] | None = None
    ) -> set[str]:
        """Return ids of events reported by user (optionally restricted to event_ids)."""

    async def dismiss_for_event(self, event_id: str) -> int:
        """Mark the event's active reports dismissed; return how many were dismissed."""

    async def list_active_for_events(self, event_ids: Iterable[str]) -> list[ReportResult]:
        """Return non-dismissed reports for the given events."""
