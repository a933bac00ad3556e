"""
Data Models Package

This package contains all Pydantic models used in FinanFlow.
All data flowing through the system must conform to these schemas.
"""

from finanflow.models.commission import (
    CommissionQuote,
    CommissionState,
    LaunchOutcome,
)
from finanflow.models.summary import (
    AlertLevel,
    CategoryTotal,
    DashboardView,
    DueAlert,
    FinancialSummary,
    MonthlyTotals,
    ReportTotals,
)
from finanflow.models.transaction import (
    CommissionReceiver,
    PaymentStatus,
    Transaction,
    TransactionData,
    TransactionType,
    new_id,
)
from finanflow.models.validation import (
    ReceiverForm,
    TransactionForm,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Ledger records
    "CommissionReceiver",
    "PaymentStatus",
    "Transaction",
    "TransactionData",
    "TransactionType",
    "new_id",
    # Derived views
    "AlertLevel",
    "CategoryTotal",
    "DashboardView",
    "DueAlert",
    "FinancialSummary",
    "MonthlyTotals",
    "ReportTotals",
    # Commission workflow
    "CommissionQuote",
    "CommissionState",
    "LaunchOutcome",
    # Validation
    "ReceiverForm",
    "TransactionForm",
    "ValidationIssue",
    "ValidationResult",
]
