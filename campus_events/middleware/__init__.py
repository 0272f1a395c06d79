"""HTTP middleware. Applied in create_app (first added = outermost)."""

from campus_events.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
