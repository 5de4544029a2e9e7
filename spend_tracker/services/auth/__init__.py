"""Authentication services package."""

from spend_tracker.services.auth.credential_service import (
    AuthenticationError,
    CredentialService,
    MockCredentialService,
)
from spend_tracker.services.auth.session import AuthSession

__all__ = [
    "AuthSession",
    "AuthenticationError",
    "CredentialService",
    "MockCredentialService",
]
