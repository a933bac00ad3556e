"""In-memory storage backend, for tests and throwaway sessions."""

import copy
from typing import Optional

from finanflow.services.storage.interface import Record, RecordStorageInterface


class InMemoryStorage(RecordStorageInterface):
    """Keeps deep copies of each slot so callers cannot alias stored state."""

    def __init__(self, initial: Optional[dict[str, list[Record]]] = None):
        self._slots: dict[str, list[Record]] = copy.deepcopy(initial or {})
        self.save_count = 0

    def load(self, slot: str) -> Optional[list[Record]]:
        if slot not in self._slots:
            return None
        return copy.deepcopy(self._slots[slot])

    def save(self, slot: str, records: list[Record]) -> bool:
        self._slots[slot] = copy.deepcopy(records)
        self.save_count += 1
        return True
