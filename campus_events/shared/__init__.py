"""Shared utilities: logging and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from campus_events.shared.utils import (
    InputSanitizer,
    ensure_utc,
    generate_cuid,
    strip_html,
    utc_now,
)

__all__ = [
    "InputSanitizer",
    "ensure_utc",
    "generate_cuid",
    "strip_html",
    "utc_now",
]
