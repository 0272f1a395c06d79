"""Errors raised by the campus events core.

Each carries a machine-readable error_code that core.exception_handlers maps
to an HTTP status. Nothing here knows about HTTP or the database.
"""

from typing import Any


class CampusEventsError(Exception):
    """Root of every error the service raises on purpose.

    Attributes:
        message: Text safe to show to the user.
        error_code: Stable code clients switch on (e.g. DUPLICATE_REPORT).
        details: Extra context such as the offending field or event id.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class EventValidationError(CampusEventsError):
    """Raised when event input fails a write-time rule (length, building, office hours)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidFilterError(CampusEventsError):
    """Raised for malformed listing criteria (bad date token, page, or page size)."""

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
            details["value"] = value
        super().__init__(message, "INVALID_FILTER", details)


class NotFoundError(CampusEventsError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class OwnerCannotReportError(CampusEventsError):
    """Raised when an event's author tries to report their own event."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            "You cannot report your own event",
            "OWNER_CANNOT_REPORT",
            {"event_id": event_id},
        )


class DuplicateReportError(CampusEventsError):
    """Raised when (event_id, user_id) already has a report (unique constraint)."""

    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__(
            "You have already reported this event",
            "DUPLICATE_REPORT",
            {"event_id": event_id, "user_id": user_id},
        )


class AuthenticationError(CampusEventsError):
    """Raised when a request requires a signed-in user and none is present."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class PermissionDeniedError(CampusEventsError):
    """Raised when the user lacks rights for the operation (not owner, not admin)."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'event').
            action: Optional action that was attempted (e.g. 'update', 'approve').
            message: Human-readable message; derived from resource and action when omitted.
        """
        if message is None:
            message = (
                f"Permission denied: {action} on {resource}"
                if resource and action
                else "Permission denied"
            )
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class InvalidTransitionError(CampusEventsError):
    """Raised when a moderation trigger is not allowed from the event's current status."""

    def __init__(self, current_status: str, trigger: str) -> None:
        super().__init__(
            f"Cannot apply '{trigger}' to an event with status '{current_status}'",
            "INVALID_TRANSITION",
            {"current_status": current_status, "trigger": trigger},
        )


class StoreUnavailableError(CampusEventsError):
    """Raised when the backing store fails; wraps the underlying driver error.

    Idempotent reads may be retried by the caller; writes must not be
    retried blindly.
    """

    def __init__(self, operation: str, reason: str | None = None) -> None:
        details: dict[str, Any] = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Event store unavailable during {operation}",
            "STORE_UNAVAILABLE",
            details,
        )
