"""
Aggregation Engine

Pure functions deriving dashboard views from a ledger snapshot:
financial summary, monthly cash-flow series, category cost breakdown
and due-date alerts.

DESIGN DECISION: Nothing here is stored. Every view is recomputed from
the full snapshot, which is cheap at this data scale. LedgerProjections
memoizes the results per store version so repeated reads between two
mutations don't rescan the ledger.
"""

from collections.abc import Callable, Iterable
from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from finanflow.commissions.engine import (
    commission_history,
    eligible_sales,
    is_commission_expense,
)
from finanflow.models.summary import (
    ZERO,
    AlertLevel,
    CategoryTotal,
    DueAlert,
    FinancialSummary,
    MonthlyTotals,
    ReportTotals,
)
from finanflow.models.transaction import PaymentStatus, Transaction, TransactionType

if TYPE_CHECKING:
    from finanflow.ledger.store import LedgerStore


DEFAULT_ALERT_WINDOW_DAYS = 3


def compute_summary(transactions: Iterable[Transaction]) -> FinancialSummary:
    """
    Walk the ledger once.

    PAID movements feed the totals and the balance; PENDING ones only
    feed the pending totals.
    """
    total_income = total_expense = balance = ZERO
    pending_income = pending_expense = ZERO

    for t in transactions:
        if t.type is TransactionType.INCOME:
            if t.status is PaymentStatus.PAID:
                total_income += t.amount
                balance += t.amount
            else:
                pending_income += t.amount
        else:
            if t.status is PaymentStatus.PAID:
                total_expense += t.amount
                balance -= t.amount
            else:
                pending_expense += t.amount

    return FinancialSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=balance,
        pending_income=pending_income,
        pending_expense=pending_expense,
    )


def monthly_series(transactions: Iterable[Transaction]) -> list[MonthlyTotals]:
    """Income/expense per (year, month) of booking date, oldest first."""
    buckets: dict[tuple[int, int], list[Decimal]] = {}

    for t in transactions:
        key = (t.booking_date.year, t.booking_date.month)
        income_expense = buckets.setdefault(key, [ZERO, ZERO])
        if t.type is TransactionType.INCOME:
            income_expense[0] += t.amount
        else:
            income_expense[1] += t.amount

    return [
        MonthlyTotals(year=year, month=month, income=income, expense=expense)
        for (year, month), (income, expense) in sorted(buckets.items())
    ]


def category_breakdown(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    """Expense totals per category, largest cost center first."""
    totals: dict[str, Decimal] = {}
    for t in transactions:
        if t.type is TransactionType.EXPENSE:
            totals[t.category] = totals.get(t.category, ZERO) + t.amount

    return sorted(
        (CategoryTotal(category=name, total=total) for name, total in totals.items()),
        key=lambda c: c.total,
        reverse=True,
    )


def due_alerts(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
    window_days: int = DEFAULT_ALERT_WINDOW_DAYS,
) -> list[DueAlert]:
    """
    PENDING transactions due on or before today + window_days.

    Sorted by due date (most urgent first). Dates carry no time of day,
    so "today" compares by calendar day.
    """
    today = today or date.today()
    horizon = today + timedelta(days=window_days)

    alerts = []
    for t in transactions:
        if t.status is not PaymentStatus.PENDING or t.due_date > horizon:
            continue

        if t.due_date < today:
            level = AlertLevel.OVERDUE
        elif t.due_date == today:
            level = AlertLevel.DUE_TODAY
        else:
            level = AlertLevel.UPCOMING

        alerts.append(DueAlert(
            transaction=t,
            level=level,
            days_until_due=(t.due_date - today).days,
        ))

    alerts.sort(key=lambda a: a.transaction.due_date)
    return alerts


def is_overdue(transaction: Transaction, today: Optional[date] = None) -> bool:
    """PENDING and past its due date."""
    today = today or date.today()
    return transaction.status is PaymentStatus.PENDING and transaction.due_date < today


def report_totals(transactions: Iterable[Transaction]) -> ReportTotals:
    """Totals for the printable report (all statuses)."""
    total_income = total_expense = paid_expense = ZERO
    for t in transactions:
        if t.type is TransactionType.INCOME:
            total_income += t.amount
        else:
            total_expense += t.amount
            if t.status is PaymentStatus.PAID:
                paid_expense += t.amount

    return ReportTotals(
        total_income=total_income,
        total_expense=total_expense,
        paid_expense=paid_expense,
    )


def ledger_listing(transactions: Iterable[Transaction]) -> list[Transaction]:
    """
    Transactions shown in the main statement.

    Commission expenses live in the commission history instead.
    Newest booking date first.
    """
    return sorted(
        (t for t in transactions if not is_commission_expense(t)),
        key=lambda t: t.booking_date,
        reverse=True,
    )


class LedgerProjections:
    """
    Memoized views over a LedgerStore.

    The cache is keyed on the store's version: any mutation invalidates
    every view at once, and reads between mutations are free.
    """

    def __init__(
        self,
        store: "LedgerStore",
        alert_window_days: int = DEFAULT_ALERT_WINDOW_DAYS,
    ):
        self._store = store
        self._alert_window_days = alert_window_days
        self._cache: dict[tuple, Any] = {}
        self._cached_version: Optional[int] = None

    def _memo(self, key: tuple, compute: Callable[[tuple[Transaction, ...]], Any]) -> Any:
        version = self._store.version
        if version != self._cached_version:
            self._cache.clear()
            self._cached_version = version

        if key not in self._cache:
            self._cache[key] = compute(self._store.snapshot())
        return self._cache[key]

    def summary(self) -> FinancialSummary:
        return self._memo(("summary",), compute_summary)

    def monthly(self) -> tuple[MonthlyTotals, ...]:
        return self._memo(("monthly",), lambda ts: tuple(monthly_series(ts)))

    def categories(self) -> tuple[CategoryTotal, ...]:
        return self._memo(("categories",), lambda ts: tuple(category_breakdown(ts)))

    def alerts(self, today: Optional[date] = None) -> tuple[DueAlert, ...]:
        today = today or date.today()
        return self._memo(
            ("alerts", today),
            lambda ts: tuple(due_alerts(ts, today, self._alert_window_days)),
        )

    def report_totals(self) -> ReportTotals:
        return self._memo(("report_totals",), report_totals)

    def listing(self) -> tuple[Transaction, ...]:
        return self._memo(("listing",), lambda ts: tuple(ledger_listing(ts)))

    def eligible_sales(self) -> tuple[Transaction, ...]:
        return self._memo(("eligible_sales",), lambda ts: tuple(eligible_sales(ts)))

    def commission_history(self) -> tuple[Transaction, ...]:
        return self._memo(("commission_history",), lambda ts: tuple(commission_history(ts)))
