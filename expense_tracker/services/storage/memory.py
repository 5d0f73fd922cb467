"""In-memory key-value storage, used by tests and when no data directory is wanted."""

from typing import Optional

from expense_tracker.services.storage.interface import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Key-value storage held in a plain dict."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
