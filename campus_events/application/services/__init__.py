"""Application services: query composition, date ranges, pagination, report cache."""

from campus_events.application.services.date_range_resolver import (
    DateRangeResolver,
    parse_date_range_token,
)
from campus_events.application.services.pagination import PaginationCalculator
from campus_events.application.services.query_builder import EventQueryBuilder
from campus_events.application.services.report_status_cache import ReportStatusCache

__all__ = [
    "DateRangeResolver",
    "EventQueryBuilder",
    "PaginationCalculator",
    "ReportStatusCache",
    "parse_date_range_token",
]
