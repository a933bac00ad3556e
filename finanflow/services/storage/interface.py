"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the JSON file store for Google Sheets (or a database) later
2. Use in-memory storage for testing
3. Keep ledger logic decoupled from storage implementation

The interface is intentionally tiny. The ledger keeps its state in
memory and hands the storage a full list of flat records on every
change, one named slot per collection. No partial updates.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


Record = dict[str, Any]


class RecordStorageInterface(ABC):
    """
    Abstract interface for slot-based record storage.

    Any storage implementation (JSON files, Google Sheets, etc.)
    must implement these methods.
    """

    @abstractmethod
    def load(self, slot: str) -> Optional[list[Record]]:
        """
        Load every record stored in a slot.

        Args:
            slot: Name of the durable slot (e.g. 'finanflow_transactions')

        Returns:
            The records in stored order, or None if the slot was never saved

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, slot: str, records: list[Record]) -> bool:
        """
        Replace the content of a slot with the given records.

        Args:
            slot: Name of the durable slot
            records: Full, ordered list of flat records

        Returns:
            True if saved successfully

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass


class SerializationError(StorageError):
    """Stored content could not be decoded."""
    pass
