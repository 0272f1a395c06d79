"""Timezone helpers.

Instants are stored and compared as aware UTC datetimes. Calendar logic
(start of day, week and month bounds, office hours) runs on campus wall-clock
time and converts back to UTC at the edges.
"""

from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Current instant, aware, in UTC. The default clock for services."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize dt to aware UTC; None passes through.

    Naive values are read as UTC wall time (SQLite hands datetimes back
    without an offset); aware values are converted.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def get_zone(name: str) -> tzinfo:
    """Return tzinfo for an IANA zone name ("UTC" maps to datetime.UTC)."""
    if name.upper() == "UTC":
        return UTC
    return ZoneInfo(name)


def to_zone(dt: datetime, zone: tzinfo) -> datetime:
    """Convert an instant to wall-clock time in zone (naive input is treated as UTC)."""
    return ensure_utc(dt).astimezone(zone)
