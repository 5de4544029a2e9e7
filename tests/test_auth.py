"""Tests for the mock credential service and the auth session."""

import asyncio

import pytest

from spend_tracker.models.audit import AuditEventType
from spend_tracker.services.auth import (
    AuthenticationError,
    AuthSession,
    MockCredentialService,
)
from spend_tracker.services.storage import InMemoryStorage

from conftest import AUTH_KEY, FailingStorage


@pytest.fixture
def credentials():
    return MockCredentialService(delay_seconds=0, google_delay_seconds=0, min_password_length=6)


@pytest.fixture
def session(credentials, storage, audit_logger):
    return AuthSession(credentials, storage, auth_key=AUTH_KEY, audit_logger=audit_logger)


class TestMockCredentialService:
    """Tests for MockCredentialService."""

    def test_sign_in_accepts_any_email(self, credentials):
        user = asyncio.run(credentials.sign_in("jane@example.com", "secret1"))
        assert user.email == "jane@example.com"
        assert user.name == "jane"
        assert user.id

    @pytest.mark.parametrize("email,password", [
        ("", "secret1"),
        ("jane@example.com", "short"),
        ("jane@example.com", ""),
    ])
    def test_sign_in_rejects(self, credentials, email, password):
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            asyncio.run(credentials.sign_in(email, password))

    def test_sign_up_keeps_name(self, credentials):
        user = asyncio.run(credentials.sign_up("jane@example.com", "secret1", "Jane Doe"))
        assert user.name == "Jane Doe"

    def test_sign_up_error_mentions_minimum(self, credentials):
        with pytest.raises(AuthenticationError, match="minimum 6 characters"):
            asyncio.run(credentials.sign_up("jane@example.com", "123"))

    def test_google_profile(self, credentials):
        user = asyncio.run(credentials.sign_in_with_google())
        assert user.id.startswith("google_")
        assert user.email == "user@gmail.com"
        assert user.name == "Google User"
        assert user.avatar.startswith("https://")


class TestAuthSession:
    """Tests for AuthSession persistence."""

    def test_sign_in_persists_user(self, session, storage):
        user = asyncio.run(session.sign_in("jane@example.com", "secret1"))

        assert session.is_signed_in is True
        assert session.current_user == user
        assert asyncio.run(storage.get_item(AUTH_KEY))["email"] == "jane@example.com"

    def test_load_restores_user(self, session, storage, credentials):
        asyncio.run(session.sign_up("jane@example.com", "secret1", "Jane"))

        restored = AuthSession(credentials, storage, auth_key=AUTH_KEY)
        user = asyncio.run(restored.load_user())
        assert user.name == "Jane"
        assert restored.is_signed_in is True

    def test_load_without_user(self, session):
        assert asyncio.run(session.load_user()) is None
        assert session.is_signed_in is False

    def test_load_corrupt_user_is_signed_out(self, credentials):
        storage = InMemoryStorage({AUTH_KEY: {"name": "no id or email"}})
        session = AuthSession(credentials, storage, auth_key=AUTH_KEY)
        assert asyncio.run(session.load_user()) is None

    def test_load_read_failure_is_signed_out(self, credentials):
        session = AuthSession(credentials, FailingStorage(), auth_key=AUTH_KEY)
        assert asyncio.run(session.load_user()) is None

    def test_sign_out_removes_key(self, session, storage):
        async def scenario():
            await session.sign_in_with_google()
            await session.sign_out()

        asyncio.run(scenario())
        assert session.current_user is None
        assert asyncio.run(storage.has_item(AUTH_KEY)) is False

    def test_failed_sign_in_is_audited_and_raised(self, session, audit_logger, storage):
        with pytest.raises(AuthenticationError):
            asyncio.run(session.sign_in("jane@example.com", "123"))

        assert session.is_signed_in is False
        assert asyncio.run(storage.has_item(AUTH_KEY)) is False
        assert audit_logger.history[-1].event_type == AuditEventType.AUTH_FAILED

    def test_sign_up_is_audited(self, session, audit_logger):
        asyncio.run(session.sign_up("jane@example.com", "secret1"))
        assert audit_logger.history[-1].event_type == AuditEventType.USER_SIGNED_UP
