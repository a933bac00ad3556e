"""Commission package: eligibility, computation, commit and calculator session."""

from finanflow.commissions.engine import (
    INVALID_RATE_MESSAGE,
    NO_RECEIVER_MESSAGE,
    NO_SALES_MESSAGE,
    STALE_SELECTION_MESSAGE,
    build_commission_expense,
    build_quote,
    commission_history,
    compute_commission,
    eligible_sales,
    is_commission_expense,
    is_eligible_sale,
    is_sale,
    launch_commission,
    parse_rate,
    resolve_rate,
    sales_for_commission,
)
from finanflow.commissions.session import CommissionSession, CommissionStateError

__all__ = [
    "INVALID_RATE_MESSAGE",
    "NO_RECEIVER_MESSAGE",
    "NO_SALES_MESSAGE",
    "STALE_SELECTION_MESSAGE",
    "CommissionSession",
    "CommissionStateError",
    "build_commission_expense",
    "build_quote",
    "commission_history",
    "compute_commission",
    "eligible_sales",
    "is_commission_expense",
    "is_eligible_sale",
    "is_sale",
    "launch_commission",
    "parse_rate",
    "resolve_rate",
    "sales_for_commission",
]
