"""
Storage Services Package

Provides the abstract slot-storage interface and concrete backends.
JSON files are the default; Google Sheets and in-memory are swappable.
"""

from finanflow.services.storage.interface import (
    ConnectionError,
    Record,
    RecordStorageInterface,
    SerializationError,
    StorageError,
)
from finanflow.services.storage.json_file import JsonFileStorage
from finanflow.services.storage.memory import InMemoryStorage
from finanflow.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsStorage,
)

__all__ = [
    # Interface
    "Record",
    "RecordStorageInterface",
    # Exceptions
    "ConnectionError",
    "SerializationError",
    "StorageError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsStorage",
    "InMemoryStorage",
    "JsonFileStorage",
]
