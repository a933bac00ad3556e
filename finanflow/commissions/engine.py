"""
Commission Engine

Eligibility filtering, rate resolution, commission computation and the
compound commit that turns a batch of sales into one commission expense.

CRITICAL RULES:
1. A sale with commission_paid=True is never eligible again
2. The commission is rounded once, on the final value, never on the
   summed base (no compounding error across many small sales)
3. Marking the sources and inserting the expense is a single ledger
   transition (LedgerStore.apply_commission)
4. Validation failures are returned as LaunchOutcome, not raised

Deleting a commission expense is a plain ledger delete. It does NOT
reset commission_paid on the sales it was computed from.
"""

import re
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal, DecimalException
from typing import TYPE_CHECKING, Any, Optional

from finanflow.formatting import format_brl, round2
from finanflow.models.commission import CommissionQuote, LaunchOutcome
from finanflow.models.summary import ZERO
from finanflow.models.taxonomy import (
    COMMISSION_CATEGORY,
    COMMISSION_SUBCATEGORY,
    SALES_CATEGORY,
)
from finanflow.models.transaction import (
    CommissionReceiver,
    PaymentStatus,
    Transaction,
    TransactionData,
    TransactionType,
)
from finanflow.observability import get_logger

if TYPE_CHECKING:
    from finanflow.ledger.store import LedgerStore


logger = get_logger(__name__)

NO_RECEIVER_MESSAGE = "Selecione um membro da equipe primeiro."
NO_SALES_MESSAGE = "Nenhuma venda selecionada para calcular."
INVALID_RATE_MESSAGE = "Taxa de comissão inválida. Informe um percentual a partir de 0."
STALE_SELECTION_MESSAGE = (
    "Algumas vendas selecionadas não estão mais disponíveis para comissão. "
    "Revise a seleção."
)


# =============================================================================
# CLASSIFICATION
# =============================================================================

def is_sale(transaction: Transaction) -> bool:
    """
    Does this record represent a sale?

    Loose on purpose: subcategories are free text, so any subcategory
    containing "Venda" or "Matrícula" counts, as does the whole
    revenue category. Keep the exact substring semantics; this is the
    one place to change if the rule gets tightened.
    """
    return (
        transaction.category == SALES_CATEGORY
        or "Venda" in transaction.subcategory
        or "Matrícula" in transaction.subcategory
    )


def is_eligible_sale(transaction: Transaction) -> bool:
    return (
        transaction.type is TransactionType.INCOME
        and not transaction.commission_paid
        and is_sale(transaction)
    )


def is_commission_expense(transaction: Transaction) -> bool:
    return (
        transaction.type is TransactionType.EXPENSE
        and transaction.category == COMMISSION_CATEGORY
        and transaction.subcategory == COMMISSION_SUBCATEGORY
    )


def eligible_sales(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sales still awaiting a commission, newest booking date first."""
    return sorted(
        (t for t in transactions if is_eligible_sale(t)),
        key=lambda t: t.booking_date,
        reverse=True,
    )


def commission_history(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Generated commission expenses, newest booking date first."""
    return sorted(
        (t for t in transactions if is_commission_expense(t)),
        key=lambda t: t.booking_date,
        reverse=True,
    )


def sales_for_commission(
    transactions: Iterable[Transaction],
    expense: Transaction,
) -> list[Transaction]:
    """
    The sale records a commission expense was computed from.

    Only expenses created with source links have any; sales deleted
    since are simply missing from the result.
    """
    wanted = set(expense.source_sale_ids)
    return [t for t in transactions if t.id in wanted]


# =============================================================================
# COMPUTATION
# =============================================================================

_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_rate(value: Any) -> Optional[Decimal]:
    """
    Parse a user-entered percentage.

    Accepts numbers and strings that start with a number ("12.5",
    " 12,5 ", "12%", "12 %"); anything after the leading number is
    ignored. Returns None for blanks, garbage and non-finite values.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        rate = value
    elif isinstance(value, (int, float)):
        rate = Decimal(str(value))
    else:
        text = str(value).strip().replace(",", ".")
        match = _NUMERIC_PREFIX.match(text)
        if match is None:
            return None
        rate = Decimal(match.group())

    if not rate.is_finite():
        return None
    return rate


def resolve_rate(receiver: CommissionReceiver, override: Any = None) -> Decimal:
    """Explicit override if it parses, otherwise the receiver's default rate."""
    rate = parse_rate(override)
    return rate if rate is not None else receiver.default_rate


def compute_commission(amounts: Iterable[Decimal], rate: Decimal) -> Decimal:
    """round2(sum(amounts) * rate / 100)"""
    base = sum(amounts, ZERO)
    return round2(base * rate / Decimal(100))


def build_quote(
    receiver: CommissionReceiver,
    sales: Sequence[Transaction],
    rate_override: Any = None,
) -> Optional[CommissionQuote]:
    """
    Freeze the calculator result for confirmation.

    Returns None when the resolved rate is negative or the commission
    is too large to round to cents.
    """
    rate = resolve_rate(receiver, rate_override)
    if rate < 0:
        return None

    base = sum((t.amount for t in sales), ZERO)
    try:
        amount = compute_commission((t.amount for t in sales), rate)
    except DecimalException:
        return None

    return CommissionQuote(
        receiver=receiver,
        rate=rate,
        sales_base=base,
        amount=amount,
        sale_ids=tuple(t.id for t in sales),
    )


def build_commission_expense(
    receiver: CommissionReceiver,
    amount: Decimal,
    sale_ids: Sequence[str],
    today: Optional[date] = None,
) -> TransactionData:
    """The expense a commission batch is booked as: pending, due today."""
    today = today or date.today()
    return TransactionData(
        description=f"Comissão - {receiver.name}",
        amount=amount,
        type=TransactionType.EXPENSE,
        category=COMMISSION_CATEGORY,
        subcategory=COMMISSION_SUBCATEGORY,
        booking_date=today,
        due_date=today,
        status=PaymentStatus.PENDING,
        commission_paid=False,
        receiver_id=receiver.id,
        source_sale_ids=tuple(sale_ids),
    )


# =============================================================================
# COMMIT
# =============================================================================

def launch_commission(
    store: "LedgerStore",
    quote: CommissionQuote,
    today: Optional[date] = None,
) -> LaunchOutcome:
    """
    Book a confirmed quote against the ledger.

    Every quoted sale must still be eligible at commit time (it may have
    been deleted, edited or settled since the quote was made); otherwise
    nothing is written.
    """
    eligible_ids = {t.id for t in store.snapshot() if is_eligible_sale(t)}
    stale = [sale_id for sale_id in quote.sale_ids if sale_id not in eligible_ids]
    if stale:
        logger.warning(
            "commission_launch_rejected",
            reason="stale_selection",
            stale_ids=stale,
            receiver_id=quote.receiver.id,
        )
        return LaunchOutcome(success=False, message=STALE_SELECTION_MESSAGE, quote=quote)

    expense = build_commission_expense(
        quote.receiver, quote.amount, quote.sale_ids, today=today
    )
    created = store.apply_commission(expense, quote.sale_ids)

    return LaunchOutcome(
        success=True,
        message=(
            f"Comissão de {format_brl(quote.amount)} lançada para "
            f"{quote.receiver.name} ({quote.count} venda(s))."
        ),
        quote=quote,
        expense=created,
    )
