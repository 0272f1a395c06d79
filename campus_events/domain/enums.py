"""Domain enumerations for the campus events service.

Enums represent closed sets of domain values (status, venue, report reason).
"""

from enum import Enum


class EventStatus(str, Enum):
    """Event moderation status.

    active: normal, publicly listed. under_review: report threshold reached,
    still visible (pending badge) until an admin decides. rejected: removed
    by moderation; the event row is deleted immediately after.
    """

    ACTIVE = "active"
    UNDER_REVIEW = "under_review"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]


class Building(str, Enum):
    """Venues an event can be held in."""

    BUILDING_1 = "Building 1"
    BUILDING_2 = "Building 2"
    FOOD_COURT = "Food Court"
    MAIN_HALL = "Main Hall"

    @classmethod
    def values(cls) -> list[str]:
        return [b.value for b in cls]


# Listing sentinel meaning "no building predicate".
ALL_BUILDINGS = "All"


class ReportReason(str, Enum):
    """Why a user reported an event."""

    SPAM = "spam"
    SEXUAL_CONTENT = "sexual_content"
    HATE_SPEECH = "hate_speech"
    MISINFORMATION = "misinformation"
    SCAM = "scam"
    VIOLENCE = "violence"
    OTHER = "other"

    @classmethod
    def values(cls) -> list[str]:
        return [r.value for r in cls]


class DateRangeToken(str, Enum):
    """Symbolic date filter offered in discovery (All Dates / Today / This Week / This Month)."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


class SortOrder(str, Enum):
    """Result ordering. Discovery is always SOONEST_FIRST; the admin queue uses MOST_REPORTED."""

    SOONEST_FIRST = "soonest_first"
    MOST_REPORTED = "most_reported"


class ModerationTrigger(str, Enum):
    """Inputs to the moderation state machine."""

    REPORT_THRESHOLD_REACHED = "report_threshold_reached"
    ADMIN_APPROVED = "admin_approved"
    ADMIN_REJECTED = "admin_rejected"
    OWNER_DELETED = "owner_deleted"
