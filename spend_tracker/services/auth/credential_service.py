"""
Credential Service

DESIGN DECISION: Sign-in is an abstract capability, like scanning.
The session only talks to CredentialService, so a real identity backend
can replace the mock later.

The shipped implementation is a MOCK:
- Any non-empty email with a long enough password signs in
- Sign-up accepts the same and keeps an optional display name
- "Sign in with Google" always returns the same demo profile
- Each call waits a fixed delay to simulate a network round trip
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional
from uuid import uuid4

import structlog

from spend_tracker.config import get_settings
from spend_tracker.models.user import UserProfile


logger = structlog.get_logger(__name__)

GOOGLE_DEMO_EMAIL = "user@gmail.com"
GOOGLE_DEMO_NAME = "Google User"
GOOGLE_DEMO_AVATAR = (
    "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e"
    "?w=100&h=100&fit=crop&crop=face"
)


class AuthenticationError(Exception):
    """Credentials were rejected."""
    pass


class CredentialService(ABC):
    """Turns credentials into a user profile."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> UserProfile:
        """
        Sign in with email and password.

        Raises:
            AuthenticationError: If the credentials are rejected
        """
        pass

    @abstractmethod
    async def sign_up(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
    ) -> UserProfile:
        """
        Register a new account.

        Raises:
            AuthenticationError: If the credentials are rejected
        """
        pass

    @abstractmethod
    async def sign_in_with_google(self) -> UserProfile:
        """Run the Google sign-in flow."""
        pass


class MockCredentialService(CredentialService):
    """Accepts any email with a password of at least min_password_length."""

    def __init__(
        self,
        delay_seconds: Optional[float] = None,
        google_delay_seconds: Optional[float] = None,
        min_password_length: Optional[int] = None,
    ):
        settings = get_settings().auth
        self._delay_seconds = (
            settings.delay_seconds if delay_seconds is None else delay_seconds
        )
        self._google_delay_seconds = (
            settings.google_delay_seconds
            if google_delay_seconds is None
            else google_delay_seconds
        )
        self._min_password_length = (
            settings.min_password_length
            if min_password_length is None
            else min_password_length
        )

    def _accepts(self, email: str, password: str) -> bool:
        return bool(email and email.strip()) and len(password or "") >= self._min_password_length

    async def sign_in(self, email: str, password: str) -> UserProfile:
        logger.info("signing_in_user", email=email)
        await asyncio.sleep(self._delay_seconds)

        if not self._accepts(email, password):
            raise AuthenticationError("Invalid email or password")

        email = email.strip()
        return UserProfile(
            id=uuid4().hex,
            email=email,
            name=email.split("@")[0],
        )

    async def sign_up(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
    ) -> UserProfile:
        logger.info("signing_up_user", email=email)
        await asyncio.sleep(self._delay_seconds)

        if not self._accepts(email, password):
            raise AuthenticationError(
                f"Invalid email or password (minimum {self._min_password_length} characters)"
            )

        email = email.strip()
        return UserProfile(
            id=uuid4().hex,
            email=email,
            name=name or email.split("@")[0],
        )

    async def sign_in_with_google(self) -> UserProfile:
        logger.info("signing_in_with_google")
        await asyncio.sleep(self._google_delay_seconds)

        return UserProfile(
            id=f"google_{uuid4().hex}",
            email=GOOGLE_DEMO_EMAIL,
            name=GOOGLE_DEMO_NAME,
            avatar=GOOGLE_DEMO_AVATAR,
        )
