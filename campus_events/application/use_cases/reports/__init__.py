"""Report use cases: submission and has-reported lookups."""

from campus_events.application.use_cases.reports.report_ledger import ReportLedger

__all__ = ["ReportLedger"]
