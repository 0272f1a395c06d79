"""Page arithmetic shared by listings.

total_pages is 0 when there are no results, so callers can tell "no
results" apart from "one page of results".
"""

from campus_events.application.dtos.query import PageInfo
from campus_events.domain.exceptions import InvalidFilterError


class PaginationCalculator:
    """Derives page counts and offsets. Pages are 1-indexed; page < 1 is rejected."""

    @staticmethod
    def validate(page: int, page_size: int, max_page_size: int | None = None) -> None:
        """Raise InvalidFilterError for a non-positive page or page size (or one above max)."""
        if page_size <= 0:
            raise InvalidFilterError(
                "page_size must be greater than 0", field="page_size", value=page_size
            )
        if max_page_size is not None and page_size > max_page_size:
            raise InvalidFilterError(
                f"page_size must be at most {max_page_size}",
                field="page_size",
                value=page_size,
            )
        if page < 1:
            raise InvalidFilterError("page must be 1 or greater", field="page", value=page)

    @staticmethod
    def compute_page_info(total_count: int, page_size: int) -> PageInfo:
        """Return total pages for total_count rows at page_size per page.

        Raises:
            InvalidFilterError: If page_size <= 0.
            ValueError: If total_count is negative.
        """
        if page_size <= 0:
            raise InvalidFilterError(
                "page_size must be greater than 0", field="page_size", value=page_size
            )
        if total_count < 0:
            raise ValueError("total_count cannot be negative")
        return PageInfo(
            total_count=total_count,
            page_size=page_size,
            total_pages=-(-total_count // page_size),
        )

    @classmethod
    def page_window(cls, page: int, page_size: int) -> tuple[int, int]:
        """Return (offset, limit) for a 1-indexed page."""
        cls.validate(page, page_size)
        return (page - 1) * page_size, page_size
