"""Memoized "has this user reported this event" answers for one session or request.

Owned by the ReportLedger that created it; never shared across sessions.
Not a source of truth: a miss (None) always falls through to the store.
"""

from collections.abc import Iterable

CacheKey = tuple[str, str]


class ReportStatusCache:
    """Map of (user_id, event_id) -> reported flag. No expiry beyond its owner's lifetime."""

    def __init__(self) -> None:
        self._entries: dict[CacheKey, bool] = {}

    def get(self, key: CacheKey) -> bool | None:
        """Return the cached flag, or None on a miss."""
        return self._entries.get(key)

    def set(self, key: CacheKey, value: bool) -> None:
        self._entries[key] = value

    def invalidate(self, key: CacheKey) -> None:
        self._entries.pop(key, None)

    def warm(
        self,
        user_id: str,
        reported_ids: Iterable[str],
        checked_ids: Iterable[str] | None = None,
    ) -> None:
        """Bulk-populate from a batch lookup.

        Args:
            user_id: User the lookup was for.
            reported_ids: Events the user has reported (cached as True).
            checked_ids: Events the lookup covered; those not reported are cached as False.
        """
        reported = set(reported_ids)
        for event_id in reported:
            self._entries[(user_id, event_id)] = True
        if checked_ids is not None:
            for event_id in checked_ids:
                if event_id not in reported:
                    self._entries[(user_id, event_id)] = False

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
