"""
Local File Storage Implementation

DESIGN DECISION: A single JSON object file stands in for browser
local storage: every key is a top-level member, every value a string.

TRADEOFFS:
- The whole file is rewritten on every set (fine at personal-use scale)
- No locking; one process owns the file
- No schema versioning
"""

import json
import os
from pathlib import Path
from typing import Optional

from expense_tracker.services.storage.interface import (
    CorruptStorageError,
    KeyValueStorage,
    StorageError,
)


class JsonFileStorage(KeyValueStorage):
    """Key-value storage backed by one JSON file on disk."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}

        try:
            raw = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptStorageError(f"{self._path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageError(f"Could not read {self._path}: {e}") from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStorageError(f"{self._path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise CorruptStorageError(f"{self._path} does not hold a JSON object")

        return data

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Could not write {self._path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            # Entries written by hand may hold raw JSON instead of a string
            return json.dumps(value)
        return value

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except CorruptStorageError:
            # Unreadable content is overwritten
            data = {}
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
