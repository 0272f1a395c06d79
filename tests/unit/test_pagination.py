"""Unit tests for PaginationCalculator."""

import pytest

from campus_events.application.services.pagination import PaginationCalculator
from campus_events.domain.exceptions import InvalidFilterError


@pytest.mark.parametrize(
    ("total", "size", "pages"),
    [(0, 12, 0), (1, 12, 1), (12, 12, 1), (13, 12, 2), (10, 4, 3), (100, 1, 100)],
)
def test_total_pages_is_ceiling_of_total_over_size(total: int, size: int, pages: int) -> None:
    """total_pages = ceil(total / size); zero results means zero pages."""
    info = PaginationCalculator.compute_page_info(total, size)
    assert info.total_pages == pages
    assert info.total_count == total
    assert info.page_size == size


@pytest.mark.parametrize("size", [0, -5])
def test_non_positive_page_size_is_rejected(size: int) -> None:
    with pytest.raises(InvalidFilterError):
        PaginationCalculator.compute_page_info(10, size)


def test_negative_total_is_a_programming_error() -> None:
    with pytest.raises(ValueError):
        PaginationCalculator.compute_page_info(-1, 10)


def test_page_window_is_offset_and_limit() -> None:
    assert PaginationCalculator.page_window(1, 12) == (0, 12)
    assert PaginationCalculator.page_window(2, 4) == (4, 4)
    assert PaginationCalculator.page_window(3, 5) == (10, 5)


@pytest.mark.parametrize("page", [0, -1])
def test_page_below_one_is_rejected(page: int) -> None:
    """Pages are 1-indexed; no silent clamping."""
    with pytest.raises(InvalidFilterError) as exc_info:
        PaginationCalculator.page_window(page, 10)
    assert exc_info.value.details["field"] == "page"


def test_validate_enforces_max_page_size() -> None:
    with pytest.raises(InvalidFilterError):
        PaginationCalculator.validate(1, 101, max_page_size=100)
    PaginationCalculator.validate(1, 100, max_page_size=100)


def test_pages_cover_every_row_exactly_once() -> None:
    """Summing page sizes over pages 1..total_pages gives total_count."""
    for total in range(0, 40):
        for size in range(1, 9):
            pages = PaginationCalculator.compute_page_info(total, size).total_pages
            seen = 0
            for page in range(1, pages + 1):
                offset, limit = PaginationCalculator.page_window(page, size)
                seen += max(0, min(limit, total - offset))
            assert seen == total, (total, size)
