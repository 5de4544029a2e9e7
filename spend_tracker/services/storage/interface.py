"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the JSON-file backend out of the business logic
2. Use in-memory storage for testing
3. Swap in another on-device key-value store later

The interface is deliberately a plain key-value store. Each key holds one
JSON document and every write replaces the whole document.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for local key-value storage.

    Values are JSON-compatible Python objects (dicts, lists, strings,
    numbers, booleans, None).
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[Any]:
        """
        Read the document stored under a key.

        Args:
            key: Storage key

        Returns:
            The decoded document, or None if the key is absent

        Raises:
            CorruptDataError: If the stored document cannot be decoded
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    async def set_item(self, key: str, value: Any) -> None:
        """
        Replace the document stored under a key.

        Args:
            key: Storage key
            value: JSON-compatible document

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> bool:
        """
        Remove a key.

        Args:
            key: Storage key

        Returns:
            True if the key existed

        Raises:
            StorageError: If the removal fails
        """
        pass

    @abstractmethod
    async def has_item(self, key: str) -> bool:
        """Check whether a key is present."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptDataError(StorageError):
    """A stored document exists but is not valid JSON."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(message)
