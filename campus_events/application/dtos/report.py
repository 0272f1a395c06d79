"""DTOs for report and moderation use cases."""

from dataclasses import dataclass, field
from datetime import datetime

from campus_events.domain.enums import EventStatus, ReportReason


@dataclass(frozen=True)
class ReportCreate:
    """Report row to insert. (event_id, user_id) is unique in the store."""

    event_id: str
    user_id: str
    reason: ReportReason
    message: str | None = None


@dataclass(frozen=True)
class ReportResult:
    """Stored report. dismissed_at is set when an admin approved the event."""

    id: str
    event_id: str
    user_id: str
    reason: ReportReason
    message: str | None
    created_at: datetime
    dismissed_at: datetime | None = None


@dataclass(frozen=True)
class ReportCountUpdate:
    """Outcome of the atomic increment: new count and whether the status flipped."""

    event_id: str
    new_count: int
    status: EventStatus
    status_changed: bool


@dataclass(frozen=True)
class ReasonSummary:
    """Per-reason breakdown of active reports for one event (admin review queue)."""

    event_id: str
    counts: dict[str, int] = field(default_factory=dict)
    messages: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts.values())
