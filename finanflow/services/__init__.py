"""Services package."""

from finanflow.services.storage import (
    ConnectionError,
    GoogleSheetsClient,
    GoogleSheetsStorage,
    InMemoryStorage,
    JsonFileStorage,
    RecordStorageInterface,
    SerializationError,
    StorageError,
)

__all__ = [
    "ConnectionError",
    "GoogleSheetsClient",
    "GoogleSheetsStorage",
    "InMemoryStorage",
    "JsonFileStorage",
    "RecordStorageInterface",
    "SerializationError",
    "StorageError",
]
