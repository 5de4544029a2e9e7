"""
Auth Session

Holds the signed-in user and keeps it in local storage under the
auth key. An absent key means signed out.

Error handling:
- Loading is forgiving: unreadable data is logged and treated as signed out
- Saving and signing out propagate StorageError to the caller
- Rejected credentials propagate AuthenticationError to the caller
"""

from typing import Optional

import structlog
from pydantic import ValidationError

from spend_tracker.audit import AuditLogger
from spend_tracker.config import get_settings
from spend_tracker.models.user import UserProfile
from spend_tracker.services.auth.credential_service import (
    AuthenticationError,
    CredentialService,
)
from spend_tracker.services.storage import KeyValueStorageInterface, StorageError


logger = structlog.get_logger(__name__)


class AuthSession:
    """The current user, backed by a CredentialService and local storage."""

    def __init__(
        self,
        credentials: CredentialService,
        storage: KeyValueStorageInterface,
        auth_key: Optional[str] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._credentials = credentials
        self._storage = storage
        self._auth_key = auth_key or get_settings().storage.auth_key
        self._audit_logger = audit_logger
        self._user: Optional[UserProfile] = None

    @property
    def current_user(self) -> Optional[UserProfile]:
        return self._user

    @property
    def is_signed_in(self) -> bool:
        return self._user is not None

    async def load_user(self) -> Optional[UserProfile]:
        """Restore the user saved by a previous session, if any."""
        try:
            stored = await self._storage.get_item(self._auth_key)
            self._user = UserProfile.model_validate(stored) if stored else None
        except (StorageError, ValidationError) as e:
            logger.warning("error_loading_user", error=str(e))
            if self._audit_logger:
                self._audit_logger.log_storage_failed("load", self._auth_key, str(e))
            self._user = None
        return self._user

    async def _save_user(self, user: UserProfile) -> None:
        await self._storage.set_item(self._auth_key, user.model_dump(mode="json"))
        self._user = user

    async def sign_in(self, email: str, password: str) -> UserProfile:
        try:
            user = await self._credentials.sign_in(email, password)
        except AuthenticationError as e:
            if self._audit_logger:
                self._audit_logger.log_auth_failed(email, str(e))
            raise

        await self._save_user(user)
        if self._audit_logger:
            self._audit_logger.log_user_signed_in(user.id, user.email, "email")
        return user

    async def sign_up(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
    ) -> UserProfile:
        try:
            user = await self._credentials.sign_up(email, password, name)
        except AuthenticationError as e:
            if self._audit_logger:
                self._audit_logger.log_auth_failed(email, str(e))
            raise

        await self._save_user(user)
        if self._audit_logger:
            self._audit_logger.log_user_signed_in(
                user.id, user.email, "email", is_new_user=True
            )
        return user

    async def sign_in_with_google(self) -> UserProfile:
        user = await self._credentials.sign_in_with_google()
        await self._save_user(user)
        if self._audit_logger:
            self._audit_logger.log_user_signed_in(user.id, user.email, "google")
        return user

    async def sign_out(self) -> None:
        user_id = self._user.id if self._user else None
        await self._storage.remove_item(self._auth_key)
        self._user = None
        if self._audit_logger:
            self._audit_logger.log_user_signed_out(user_id)
