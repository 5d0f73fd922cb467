"""Services package."""

from expense_tracker.services.storage import (
    CorruptStorageError,
    ExpenseStore,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    StorageError,
)

__all__ = [
    "CorruptStorageError",
    "ExpenseStore",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "StorageError",
]
