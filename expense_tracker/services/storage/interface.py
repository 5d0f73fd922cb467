"""
Abstract Storage Interface

DESIGN DECISION: The expense store persists through a minimal
key-value interface (string keys, string values), the same shape as
browser local storage. This allows us to:
1. Keep the expense store independent of where bytes end up
2. Use in-memory storage for testing
3. Swap the JSON file for another local backend later

The interface is intentionally tiny - there is exactly one named
entry per concern and no querying.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Abstract interface for local key-value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Entry name

        Returns:
            The stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageError: If the value could not be written
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptStorageError(StorageError):
    """The backing file exists but is not a valid key-value document."""
    pass
