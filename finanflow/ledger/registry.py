"""
Receiver Registry

Collection of commission receivers (team members). Plain CRUD, no
derived logic. Same persistence policy as the Ledger Store: full
replace on every change, failures logged and swallowed.

Removing a receiver never cascades to the ledger.
"""

from collections.abc import Iterable
from typing import Optional

from pydantic import ValidationError

from finanflow.models.transaction import CommissionReceiver
from finanflow.observability import get_logger
from finanflow.services.storage import RecordStorageInterface, StorageError


DEFAULT_SLOT = "finanflow_receivers"


class ReceiverRegistry:
    """Ordered collection of commission receivers."""

    def __init__(
        self,
        storage: Optional[RecordStorageInterface] = None,
        slot: str = DEFAULT_SLOT,
        receivers: Iterable[CommissionReceiver] = (),
    ):
        self._storage = storage
        self._slot = slot
        self._receivers: tuple[CommissionReceiver, ...] = tuple(receivers)
        self._logger = get_logger(__name__)

    def list(self) -> tuple[CommissionReceiver, ...]:
        return self._receivers

    def get(self, receiver_id: str) -> Optional[CommissionReceiver]:
        for receiver in self._receivers:
            if receiver.id == receiver_id:
                return receiver
        return None

    def __len__(self) -> int:
        return len(self._receivers)

    def add(self, receiver: CommissionReceiver) -> CommissionReceiver:
        self._receivers = self._receivers + (receiver,)
        self._persist()
        self._logger.info(
            "receiver_added",
            receiver_id=receiver.id,
            role=receiver.role,
            default_rate=str(receiver.default_rate),
        )
        return receiver

    def remove(self, receiver_id: str) -> bool:
        """Remove a receiver. Confirmation is the caller's job. No-op if absent."""
        remaining = tuple(r for r in self._receivers if r.id != receiver_id)
        if len(remaining) == len(self._receivers):
            return False

        self._receivers = remaining
        self._persist()
        self._logger.info("receiver_removed", receiver_id=receiver_id)
        return True

    def load(self) -> Optional[int]:
        """Replace the in-memory registry with the persisted slot."""
        if self._storage is None:
            return None

        try:
            records = self._storage.load(self._slot)
        except StorageError as e:
            self._logger.error("registry_load_failed", slot=self._slot, error=str(e))
            return 0

        if records is None:
            return None

        loaded = []
        for record in records:
            try:
                loaded.append(CommissionReceiver.from_record(record))
            except ValidationError as e:
                self._logger.warning("registry_record_skipped", error=str(e))

        self._receivers = tuple(loaded)
        return len(loaded)

    def _persist(self) -> None:
        if self._storage is None:
            return

        try:
            self._storage.save(self._slot, [r.to_record() for r in self._receivers])
        except Exception as e:
            self._logger.error("registry_persist_failed", slot=self._slot, error=str(e))
