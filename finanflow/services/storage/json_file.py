"""
JSON File Storage Implementation

One human-readable JSON file per slot, `<data_dir>/<slot>.json`.
Every save rewrites the whole file through a temp file + rename, so a
crash mid-write leaves the previous version intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from finanflow.services.storage.interface import (
    Record,
    RecordStorageInterface,
    SerializationError,
    StorageError,
)


class JsonFileStorage(RecordStorageInterface):
    """Slot-per-file JSON storage."""

    def __init__(self, data_dir: str | Path):
        self._data_dir = Path(data_dir)

    def _path(self, slot: str) -> Path:
        return self._data_dir / f"{slot}.json"

    def load(self, slot: str) -> Optional[list[Record]]:
        path = self._path(slot)
        if not path.exists():
            return None

        try:
            with path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError as e:
            raise SerializationError(f"Corrupt slot file {path}: {e}")
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}")

        if not isinstance(data, list):
            raise SerializationError(f"Slot file {path} does not hold a list")
        return data

    def save(self, slot: str, records: list[Record]) -> bool:
        path = self._path(slot)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir, prefix=f".{slot}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(records, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
            return True
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to save slot {slot}: {e}")
