"""
Commission Calculator Session

Explicit state machine over the working selection of the commission
calculator. Nothing here is persisted.

    NO_RECEIVER_SELECTED -> RECEIVER_SELECTED -> SALES_SELECTED
        -> PENDING_CONFIRMATION -> COMMITTED

Sales may be ticked before a receiver is picked; the state then stays
NO_RECEIVER_SELECTED and prepare() rejects. While a confirmation is
pending the selection is frozen: only confirm() or cancel() are legal.

Validation failures (no receiver, empty selection, invalid rate, stale
selection) are reported as LaunchOutcome. Illegal transitions are
programming errors and raise CommissionStateError.
"""

from datetime import date
from typing import Any, Optional

from finanflow.commissions.engine import (
    INVALID_RATE_MESSAGE,
    NO_RECEIVER_MESSAGE,
    NO_SALES_MESSAGE,
    build_quote,
    eligible_sales,
    launch_commission,
)
from finanflow.formatting import format_brl
from finanflow.ledger.registry import ReceiverRegistry
from finanflow.ledger.store import LedgerStore
from finanflow.models.commission import CommissionQuote, CommissionState, LaunchOutcome
from finanflow.models.transaction import CommissionReceiver, Transaction
from finanflow.observability import get_logger


class CommissionStateError(Exception):
    """An operation was attempted in a state that does not allow it."""
    pass


class CommissionSession:
    """Working selection of the commission calculator."""

    def __init__(self, store: LedgerStore, registry: ReceiverRegistry):
        self._store = store
        self._registry = registry
        self._receiver_id: Optional[str] = None
        self._selected: list[str] = []
        self._rate_override: Any = None
        self._pending: Optional[CommissionQuote] = None
        self._last_outcome: Optional[LaunchOutcome] = None
        self._state = CommissionState.NO_RECEIVER_SELECTED
        self._logger = get_logger(__name__)

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    @property
    def state(self) -> CommissionState:
        return self._state

    @property
    def receiver(self) -> Optional[CommissionReceiver]:
        """Currently selected receiver, if it still exists in the registry."""
        if self._receiver_id is None:
            return None
        return self._registry.get(self._receiver_id)

    @property
    def pending_quote(self) -> Optional[CommissionQuote]:
        return self._pending

    @property
    def last_outcome(self) -> Optional[LaunchOutcome]:
        return self._last_outcome

    @property
    def rate_override(self) -> Any:
        return self._rate_override

    def available_sales(self) -> list[Transaction]:
        return eligible_sales(self._store.snapshot())

    def selected_sales(self) -> list[Transaction]:
        """Selected ids that are still eligible, in selection order."""
        by_id = {t.id: t for t in self.available_sales()}
        return [by_id[sale_id] for sale_id in self._selected if sale_id in by_id]

    def selected_ids(self) -> tuple[str, ...]:
        return tuple(t.id for t in self.selected_sales())

    def preview(self) -> Optional[CommissionQuote]:
        """Live calculation for display; None while it cannot be computed."""
        receiver = self.receiver
        sales = self.selected_sales()
        if receiver is None or not sales:
            return None
        return build_quote(receiver, sales, self._rate_override)

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select_receiver(self, receiver_id: Optional[str]) -> bool:
        """Pick (or clear, with None) the receiver. False if the id is unknown."""
        self._ensure_not_pending("select_receiver")
        if receiver_id is not None and self._registry.get(receiver_id) is None:
            return False

        self._receiver_id = receiver_id
        self._settle()
        return True

    def set_rate_override(self, value: Any) -> None:
        """Rate typed by the user; blank or unparsable means 'use default'."""
        self._ensure_not_pending("set_rate_override")
        self._rate_override = value

    def toggle_sale(self, sale_id: str) -> bool:
        """Add or remove one eligible sale. False if the sale is not eligible."""
        self._ensure_not_pending("toggle_sale")
        if sale_id in self._selected:
            self._selected.remove(sale_id)
        elif any(t.id == sale_id for t in self.available_sales()):
            self._selected.append(sale_id)
        else:
            return False

        self._settle()
        return True

    def select_all(self) -> None:
        """Select every eligible sale, or clear if they are all selected already."""
        self._ensure_not_pending("select_all")
        available = [t.id for t in self.available_sales()]
        if available and set(self.selected_ids()) == set(available):
            self._selected = []
        else:
            self._selected = available
        self._settle()

    def clear_selection(self) -> None:
        self._ensure_not_pending("clear_selection")
        self._selected = []
        self._settle()

    # -------------------------------------------------------------------------
    # Launch
    # -------------------------------------------------------------------------

    def prepare(self) -> LaunchOutcome:
        """
        Validate and compute the commission, then wait for confirmation.

        On success the state becomes PENDING_CONFIRMATION and the quote
        is returned in the outcome.
        """
        self._ensure_not_pending("prepare")

        receiver = self.receiver
        if receiver is None:
            return self._reject(NO_RECEIVER_MESSAGE)

        sales = self.selected_sales()
        if not sales:
            return self._reject(NO_SALES_MESSAGE)

        quote = build_quote(receiver, sales, self._rate_override)
        if quote is None:
            return self._reject(INVALID_RATE_MESSAGE)

        self._pending = quote
        self._state = CommissionState.PENDING_CONFIRMATION

        return LaunchOutcome(
            success=True,
            message=(
                f"Lançar comissão de {format_brl(quote.amount)} para "
                f"{receiver.name} sobre {quote.count} venda(s)?"
            ),
            quote=quote,
        )

    def cancel(self) -> None:
        """Drop the pending confirmation, keeping the selection."""
        if self._state is not CommissionState.PENDING_CONFIRMATION:
            raise CommissionStateError(f"Nothing to cancel in state {self._state.value}")
        self._pending = None
        self._settle()

    def confirm(self, today: Optional[date] = None) -> LaunchOutcome:
        """
        Book the pending quote.

        On success the selection is cleared and the state becomes
        COMMITTED. A stale selection sends the session back to editing.
        """
        if self._state is not CommissionState.PENDING_CONFIRMATION or self._pending is None:
            raise CommissionStateError(f"Nothing to confirm in state {self._state.value}")

        quote = self._pending
        self._pending = None
        outcome = launch_commission(self._store, quote, today=today)
        self._last_outcome = outcome

        if outcome.success:
            self._selected = []
            self._state = CommissionState.COMMITTED
            self._logger.info(
                "commission_committed",
                receiver_id=quote.receiver.id,
                amount=str(quote.amount),
                sales=quote.count,
            )
        else:
            self._settle()
        return outcome

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _reject(self, message: str) -> LaunchOutcome:
        self._logger.info("commission_prepare_rejected", reason=message)
        outcome = LaunchOutcome(success=False, message=message)
        self._last_outcome = outcome
        return outcome

    def _ensure_not_pending(self, operation: str) -> None:
        if self._state is CommissionState.PENDING_CONFIRMATION:
            raise CommissionStateError(
                f"{operation} is not allowed while a confirmation is pending"
            )

    def _settle(self) -> None:
        """Recompute the editing state from receiver and selection."""
        # Sales deleted or paid out since they were ticked drop out here
        self._selected = list(self.selected_ids())
        if self._receiver_id is None:
            self._state = CommissionState.NO_RECEIVER_SELECTED
        elif not self._selected:
            self._state = CommissionState.RECEIVER_SELECTED
        else:
            self._state = CommissionState.SALES_SELECTED
