"""Aggregation package: derived dashboard and report views."""

from finanflow.aggregation.engine import (
    DEFAULT_ALERT_WINDOW_DAYS,
    LedgerProjections,
    category_breakdown,
    compute_summary,
    due_alerts,
    is_overdue,
    ledger_listing,
    monthly_series,
    report_totals,
)

__all__ = [
    "DEFAULT_ALERT_WINDOW_DAYS",
    "LedgerProjections",
    "category_breakdown",
    "compute_summary",
    "due_alerts",
    "is_overdue",
    "ledger_listing",
    "monthly_series",
    "report_totals",
]
