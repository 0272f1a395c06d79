"""Shared utilities: datetime, generators, sanitization."""

from campus_events.shared.utils.datetime import ensure_utc, get_zone, to_zone, utc_now
from campus_events.shared.utils.generators import generate_cuid
from campus_events.shared.utils.sanitization import InputSanitizer, strip_html

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "get_zone",
    "to_zone",
    "InputSanitizer",
    "strip_html",
]
