"""
Ledger Store

Exclusive owner of the transaction collection. Everyone else reads an
immutable snapshot (a tuple of frozen Transaction records).

DESIGN DECISION: Every mutation builds a new tuple and swaps it in as
one state transition, bumps `version` and persists the full collection.
Derived views use `version` to know when their memoized results are
stale.

Mutations that reference an unknown id are silent no-ops. They return
False so callers can tell "nothing happened" from "applied".

Persistence failures are logged and swallowed: the in-memory ledger
stays the source of truth for the rest of the session.
"""

from collections.abc import Iterable
from typing import Optional

from pydantic import ValidationError

from finanflow.models.transaction import Transaction, TransactionData
from finanflow.observability import get_logger
from finanflow.services.storage import RecordStorageInterface, StorageError


DEFAULT_SLOT = "finanflow_transactions"


class LedgerStore:
    """In-memory ordered ledger with full-replace persistence."""

    def __init__(
        self,
        storage: Optional[RecordStorageInterface] = None,
        slot: str = DEFAULT_SLOT,
        transactions: Iterable[Transaction] = (),
    ):
        """
        Args:
            storage: Slot storage to persist to. If None, nothing is persisted.
            slot: Name of the slot holding the transaction list.
            transactions: Initial content (not persisted until the first mutation).
        """
        self._storage = storage
        self._slot = slot
        self._transactions: tuple[Transaction, ...] = tuple(transactions)
        self._version = 0
        self._logger = get_logger(__name__)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def version(self) -> int:
        """Incremented on every applied mutation."""
        return self._version

    def snapshot(self) -> tuple[Transaction, ...]:
        return self._transactions

    def get(self, transaction_id: str) -> Optional[Transaction]:
        for t in self._transactions:
            if t.id == transaction_id:
                return t
        return None

    def __len__(self) -> int:
        return len(self._transactions)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, data: TransactionData) -> Transaction:
        """Assign a fresh id and append. Always succeeds."""
        transaction = Transaction(**data.model_dump(exclude={"id"}))
        self._commit(self._transactions + (transaction,))
        self._logger.info(
            "transaction_created",
            transaction_id=transaction.id,
            type=transaction.type.value,
            amount=str(transaction.amount),
        )
        return transaction

    def update(self, transaction: Transaction) -> bool:
        """Replace the record with the same id. No-op if absent."""
        index = self._index_of(transaction.id)
        if index is None:
            self._logger.debug("transaction_update_skipped", transaction_id=transaction.id)
            return False

        updated = list(self._transactions)
        updated[index] = transaction
        self._commit(tuple(updated))
        self._logger.info("transaction_updated", transaction_id=transaction.id)
        return True

    def delete(self, transaction_id: str) -> bool:
        """Remove the record. No-op if absent."""
        remaining = tuple(t for t in self._transactions if t.id != transaction_id)
        if len(remaining) == len(self._transactions):
            self._logger.debug("transaction_delete_skipped", transaction_id=transaction_id)
            return False

        self._commit(remaining)
        self._logger.info("transaction_deleted", transaction_id=transaction_id)
        return True

    def toggle_status(self, transaction_id: str) -> bool:
        """Flip PAID <-> PENDING. No-op if absent."""
        current = self.get(transaction_id)
        if current is None:
            self._logger.debug("transaction_toggle_skipped", transaction_id=transaction_id)
            return False

        toggled = current.model_copy(update={"status": current.status.toggled()})
        return self.update(toggled)

    def apply_commission(
        self,
        expense: TransactionData,
        source_ids: Iterable[str],
    ) -> Transaction:
        """
        Mark the source sales as commission-paid and append the expense.

        Both effects land in one state transition: there is no observable
        snapshot with the flags set but no expense, or the other way round.
        """
        ids = set(source_ids)
        new_expense = Transaction(**expense.model_dump(exclude={"id"}))

        marked = tuple(
            t.model_copy(update={"commission_paid": True}) if t.id in ids else t
            for t in self._transactions
        )
        self._commit(marked + (new_expense,))

        self._logger.info(
            "commission_applied",
            expense_id=new_expense.id,
            amount=str(new_expense.amount),
            source_count=len(ids),
        )
        return new_expense

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> Optional[int]:
        """
        Replace the in-memory ledger with the persisted slot.

        Malformed records are skipped with a warning.

        Returns:
            Number of records loaded (0 when the slot could not be read),
            or None if the slot was never saved.
        """
        if self._storage is None:
            return None

        try:
            records = self._storage.load(self._slot)
        except StorageError as e:
            self._logger.error("ledger_load_failed", slot=self._slot, error=str(e))
            return 0

        if records is None:
            return None

        loaded = []
        for record in records:
            try:
                loaded.append(Transaction.from_record(record))
            except ValidationError as e:
                self._logger.warning(
                    "ledger_record_skipped",
                    record_id=record.get("id") if isinstance(record, dict) else None,
                    error=str(e),
                )

        self._transactions = tuple(loaded)
        self._version += 1
        return len(loaded)

    def _commit(self, transactions: tuple[Transaction, ...]) -> None:
        self._transactions = transactions
        self._version += 1
        self._persist()

    def _persist(self) -> None:
        if self._storage is None:
            return

        try:
            saved = self._storage.save(
                self._slot,
                [t.to_record() for t in self._transactions],
            )
        except Exception as e:
            # Never surfaced: memory stays the source of truth
            self._logger.error(
                "ledger_persist_failed",
                slot=self._slot,
                error=str(e),
                version=self._version,
            )
            return

        if not saved:
            self._logger.warning("ledger_persist_rejected", slot=self._slot)

    def _index_of(self, transaction_id: str) -> Optional[int]:
        for index, t in enumerate(self._transactions):
            if t.id == transaction_id:
                return index
        return None
