"""Event report ORM model. Table: event_report. One row per (event, user)."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from campus_events.infrastructure.persistence.database import Base
from campus_events.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class EventReport(CuidMixin, CreatedAtMixin, Base):
    """User report against an event. dismissed_at is set when an admin approves the event."""

    __tablename__ = "event_report"

    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("event.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    reason: Mapped[str] = mapped_column(String(32), nullable=False)
    message: Mapped[str | None] = mapped_column(String(500), nullable=True)
    dismissed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_report_event_user"),
        Index("ix_event_report_event_active", "event_id", "dismissed_at"),
    )
