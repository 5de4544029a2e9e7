"""Services package."""

from spend_tracker.services.auth import (
    AuthenticationError,
    AuthSession,
    CredentialService,
    MockCredentialService,
)
from spend_tracker.services.scan import (
    MockReceiptScanner,
    ReceiptScanner,
    ScanError,
)
from spend_tracker.services.storage import (
    CorruptDataError,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    StorageError,
)

__all__ = [
    # Auth services
    "AuthenticationError",
    "AuthSession",
    "CredentialService",
    "MockCredentialService",
    # Scan services
    "MockReceiptScanner",
    "ReceiptScanner",
    "ScanError",
    # Storage services
    "CorruptDataError",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorageInterface",
    "StorageError",
]
