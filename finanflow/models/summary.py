"""
Derived View Models

Outputs of the Aggregation Engine. None of these are persisted; they
are recomputed from the ledger snapshot.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from finanflow.models.transaction import Transaction


ZERO = Decimal("0")


class FinancialSummary(BaseModel):
    """
    Settled and pending totals over the whole ledger.

    `balance` reflects only PAID movements.
    """

    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO
    balance: Decimal = ZERO
    pending_income: Decimal = ZERO
    pending_expense: Decimal = ZERO

    @property
    def cash_forecast(self) -> Decimal:
        """Settled balance adjusted for known pending inflows/outflows."""
        return self.balance + self.pending_income - self.pending_expense


class MonthlyTotals(BaseModel):
    """Income/expense totals of one calendar month (by booking date)."""

    year: int
    month: int = Field(ge=1, le=12)
    income: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def label(self) -> str:
        return f"{self.month}/{self.year}"


class CategoryTotal(BaseModel):
    """Expense total of one category."""

    category: str
    total: Decimal = ZERO


class AlertLevel(str, Enum):
    """How urgent a due-date alert is."""
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    UPCOMING = "upcoming"


class DueAlert(BaseModel):
    """A pending transaction that is overdue or due soon."""

    transaction: Transaction
    level: AlertLevel
    days_until_due: int = Field(
        description="Negative when overdue"
    )


class ReportTotals(BaseModel):
    """
    Totals shown on the printable report.

    Unlike FinancialSummary these include every status.
    """

    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO
    paid_expense: Decimal = ZERO

    @property
    def result(self) -> Decimal:
        return self.total_income - self.total_expense


class DashboardView(BaseModel):
    """Everything the overview page shows, computed from one snapshot version."""

    summary: FinancialSummary
    monthly: list[MonthlyTotals] = Field(default_factory=list)
    categories: list[CategoryTotal] = Field(default_factory=list)
    alerts: list[DueAlert] = Field(default_factory=list)
