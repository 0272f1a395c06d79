"""initial_schema_events_and_reports

Revision ID: 4f1c2a9d7e30
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f1c2a9d7e30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - create event and event_report tables."""
    op.create_table(
        "event",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(length=50), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("building", sa.String(length=64), nullable=False),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("author_id", sa.String(), nullable=False),
        sa.Column("author_email", sa.String(), nullable=False),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("report_count", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "status IN ('active', 'under_review', 'rejected')", name="ck_event_status"
        ),
        sa.CheckConstraint("report_count >= 0", name="ck_event_report_count_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_event_building", "event", ["building"])
    op.create_index("ix_event_author_id", "event", ["author_id"])
    op.create_index("ix_event_status_date", "event", ["status", "event_date"])

    op.create_table(
        "event_report",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("reason", sa.String(length=32), nullable=False),
        sa.Column("message", sa.String(length=500), nullable=True),
        sa.Column("dismissed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["event_id"], ["event.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_report_event_user"),
    )
    op.create_index("ix_event_report_user_id", "event_report", ["user_id"])
    op.create_index(
        "ix_event_report_event_active", "event_report", ["event_id", "dismissed_at"]
    )


def downgrade() -> None:
    """Downgrade schema - drop event_report and event tables."""
    op.drop_index("ix_event_report_event_active", "event_report")
    op.drop_index("ix_event_report_user_id", "event_report")
    op.drop_table("event_report")
    op.drop_index("ix_event_status_date", "event")
    op.drop_index("ix_event_author_id", "event")
    op.drop_index("ix_event_building", "event")
    op.drop_table("event")
