"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
JSON files on disk for the app, a dict for tests.
"""

from spend_tracker.services.storage.interface import (
    CorruptDataError,
    KeyValueStorageInterface,
    StorageError,
)
from spend_tracker.services.storage.json_file import JsonFileStorage
from spend_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "CorruptDataError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
