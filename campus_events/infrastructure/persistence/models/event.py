"""Event ORM model. Table: event."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_events.infrastructure.persistence.database import Base
from campus_events.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class Event(CuidMixin, CreatedAtMixin, Base):
    """Campus event. status and report_count change only through moderation writes."""

    __tablename__ = "event"

    title: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    building: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    author_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    author_email: Mapped[str] = mapped_column(String, nullable=False)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    report_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ix_event_status_date", "status", "event_date"),
        CheckConstraint(
            "status IN ('active', 'under_review', 'rejected')", name="ck_event_status"
        ),
        CheckConstraint("report_count >= 0", name="ck_event_report_count_non_negative"),
    )
