"""
In-Memory Storage Implementation

Used by tests and by the UI when no data directory is writable.
Values are round-tripped through JSON so the same serialization
problems surface here as with the file backend.
"""

import json
from typing import Any, Optional

from spend_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
)


class InMemoryStorage(KeyValueStorageInterface):
    """Key-value storage held in a dict of JSON strings."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._items: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._items[key] = json.dumps(value)

    async def get_item(self, key: str) -> Optional[Any]:
        raw = self._items.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set_item(self, key: str, value: Any) -> None:
        try:
            self._items[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for '{key}' is not JSON serializable: {e}") from e

    async def remove_item(self, key: str) -> bool:
        return self._items.pop(key, None) is not None

    async def has_item(self, key: str) -> bool:
        return key in self._items

    def keys(self) -> list[str]:
        return list(self._items)
