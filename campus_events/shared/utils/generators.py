"""Identifiers for events and reports (CUID2)."""

from cuid2 import cuid_wrapper

_new_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new primary key for an event or report row."""
    return str(_new_cuid())
