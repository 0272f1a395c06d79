"""Moderation use cases: review queue, approval, rejection."""

from campus_events.application.use_cases.moderation.moderation_operations import (
    ModerationService,
)

__all__ = ["ModerationService"]
