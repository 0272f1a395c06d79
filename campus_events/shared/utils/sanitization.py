"""Input sanitization for user-provided event text."""

import html
from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Sanitize user inputs before they are persisted.

    Event titles and descriptions are plain text: all markup is removed and
    entities are decoded so stored text matches what the user typed.
    Use parameterized queries as the primary defense against injection.
    """

    ALLOWED_TAGS: ClassVar[set[str]] = set()

    @classmethod
    def sanitize_html(cls, value: str) -> str:
        """Remove all HTML tags with nh3 (strict by default).

        Args:
            value: Raw string that may contain HTML.

        Returns:
            Sanitized string safe for HTML display (entities escaped).
        """
        if not value:
            return value
        return nh3.clean(value, tags=cls.ALLOWED_TAGS, attributes={})

    @classmethod
    def strip_html(cls, value: str) -> str:
        """Return value as plain text: tags removed, entities decoded, whitespace trimmed."""
        if not value:
            return value
        return html.unescape(cls.sanitize_html(value)).strip()


def strip_html(value: str) -> str:
    """Module-level shortcut for InputSanitizer.strip_html."""
    return InputSanitizer.strip_html(value)
