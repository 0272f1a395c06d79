"""Unit tests for ReportStatusCache."""

from campus_events.application.services import ReportStatusCache


def test_miss_returns_none() -> None:
    assert ReportStatusCache().get(("u1", "e1")) is None


def test_set_get_invalidate() -> None:
    cache = ReportStatusCache()
    cache.set(("u1", "e1"), True)
    cache.set(("u1", "e2"), False)
    assert cache.get(("u1", "e1")) is True
    assert cache.get(("u1", "e2")) is False

    cache.invalidate(("u1", "e1"))
    assert cache.get(("u1", "e1")) is None
    cache.invalidate(("u1", "missing"))
    assert len(cache) == 1


def test_warm_caches_reported_and_checked_ids() -> None:
    """Checked-but-unreported events are cached as False; unchecked stay misses."""
    cache = ReportStatusCache()
    cache.warm("u1", {"e1"}, checked_ids=["e1", "e2"])
    assert cache.get(("u1", "e1")) is True
    assert cache.get(("u1", "e2")) is False
    assert cache.get(("u1", "e3")) is None


def test_warm_without_checked_ids_only_sets_true() -> None:
    cache = ReportStatusCache()
    cache.warm("u1", ["e1", "e2"])
    assert len(cache) == 2
    assert cache.get(("u2", "e1")) is None


def test_caches_are_independent() -> None:
    """Each instance owns its entries; nothing is shared between instances."""
    first, second = ReportStatusCache(), ReportStatusCache()
    first.set(("u1", "e1"), True)
    assert second.get(("u1", "e1")) is None


def test_clear() -> None:
    cache = ReportStatusCache()
    cache.warm("u1", ["e1"])
    cache.clear()
    assert len(cache) == 0
