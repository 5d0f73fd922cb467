"""
Storage Services Package

Provides the local key-value storage interface, its implementations,
and the expense store built on top of it.
"""

from expense_tracker.services.storage.interface import (
    CorruptStorageError,
    KeyValueStorage,
    StorageError,
)
from expense_tracker.services.storage.local_file import JsonFileStorage
from expense_tracker.services.storage.memory import InMemoryStorage
from expense_tracker.services.storage.expense_store import (
    DEFAULT_EXPENSES_KEY,
    ExpenseStore,
)

__all__ = [
    # Interfaces
    "KeyValueStorage",
    # Exceptions
    "CorruptStorageError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
    # Expense store
    "DEFAULT_EXPENSES_KEY",
    "ExpenseStore",
]
