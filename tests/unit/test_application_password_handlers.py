"""Unit tests for password change/reset and PasswordPolicyService.

Tests cover:
- Strength validation reports every violation
- History check rejects any of the last N passwords (bcrypt verify)
- ChangePasswordHandler flow: current password, confirmation, policy,
  history, storage, session revocation except the current one
- ResetUserPasswordHandler forces a change and revokes all sessions
- Store failures and timeouts surface as AUTHENTICATION_FAILED

Architecture:
- Real bcrypt (cost 10) for history checks
- In-memory password history mirroring repository eviction
"""

import asyncio
from unittest.mock import AsyncMock, Mock
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from src.application.commands import ChangePassword, ResetUserPassword
from src.application.commands.handlers import (
    ChangePasswordHandler,
    ResetUserPasswordHandler,
)
from src.application.services import PasswordPolicyService
from src.application.services.session_token_service import (
    REASON_PASSWORD_CHANGED,
    REASON_PASSWORD_RESET,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities.password_history import PasswordHistoryEntry
from src.domain.enums import AuditAction
from src.domain.errors import PasswordPolicyError
from src.domain.value_objects import SecurityPolicy
from tests.conftest import create_user


class InMemoryPasswordHistory:
    """Newest-first history capped at ``limit`` per user."""

    def __init__(self) -> None:
        self.entries: dict[UUID, list[PasswordHistoryEntry]] = {}

    async def find_recent(self, user_id: UUID, limit: int):
        return self.entries.get(user_id, [])[:limit]

    async def append(self, entry: PasswordHistoryEntry, limit: int) -> None:
        history = [entry, *self.entries.get(entry.user_id, [])]
        self.entries[entry.user_id] = history[:limit]


@pytest.fixture
def history():
    return InMemoryPasswordHistory()


@pytest.fixture
def policy_service(password_service, history):
    return PasswordPolicyService(
        policy=SecurityPolicy(),
        password_service=password_service,
        history_repo=history,
    )


@pytest.fixture
def user(password_service):
    return create_user(password_hash=password_service.hash_password("Current123!"))


@pytest.fixture
def token_service():
    service = AsyncMock()
    service.revoke_all.return_value = 3
    return service


@pytest.fixture
def change_handler(user, password_service, policy_service, token_service):
    user_repo = AsyncMock()
    user_repo.find_by_id.return_value = user
    return ChangePasswordHandler(
        user_repo=user_repo,
        password_service=password_service,
        policy_service=policy_service,
        token_service=token_service,
        audit=AsyncMock(),
        logger=Mock(),
    )


def change(user_id, current="Current123!", new="Changed123!", confirm=None, **kwargs):
    return ChangePassword(
        user_id=user_id,
        current_password=current,
        new_password=new,
        confirm_password=new if confirm is None else confirm,
        **kwargs,
    )


@pytest.mark.unit
class TestPasswordPolicyService:
    """Test strength and history rules."""

    def test_validate_reports_violations(self, policy_service):
        # Act
        result = policy_service.validate("short")

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, PasswordPolicyError)
        assert result.error.code == ErrorCode.PASSWORD_POLICY_VIOLATION
        assert result.error.field == "new_password"
        assert len(result.error.violations) == 4

    def test_validate_accepts_strong_password(self, policy_service):
        assert policy_service.validate("SecurePass123!") == Success(value=None)

    async def test_history_rejects_recent_password(
        self, policy_service, password_service
    ):
        # Arrange
        user_id = uuid7()
        await policy_service.record(user_id, password_service.hash_password("Old123!x"))

        # Act
        result = await policy_service.check_history(user_id, "Old123!x")

        # Assert
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PASSWORD_HISTORY_VIOLATION

    async def test_history_keeps_only_limit(self, policy_service, password_service, history):
        """Test the sixth-oldest password is evicted and reusable."""
        # Arrange
        user_id = uuid7()
        passwords = [f"Password{i}!a" for i in range(6)]
        for password in passwords:
            await policy_service.record(user_id, password_service.hash_password(password))

        # Assert
        assert len(history.entries[user_id]) == 5
        assert isinstance(await policy_service.check_history(user_id, passwords[0]), Success)
        for password in passwords[1:]:
            assert isinstance(await policy_service.check_history(user_id, password), Failure)


@pytest.mark.unit
class TestChangePassword:
    """Test user-initiated password change."""

    async def test_change_updates_hash_and_revokes_other_sessions(
        self, change_handler, user, password_service, token_service, history
    ):
        # Arrange
        current_session = uuid7()

        # Act
        result = await change_handler.handle(
            change(user.id, current_session_id=current_session)
        )

        # Assert
        assert result == Success(value=3)
        assert password_service.verify_password("Changed123!", user.password_hash)
        assert user.last_password_change_at is not None
        assert history.entries[user.id][0].password_hash == user.password_hash
        token_service.revoke_all.assert_awaited_once_with(
            user.id, REASON_PASSWORD_CHANGED, except_session_id=current_session
        )

    async def test_wrong_current_password(self, change_handler, user, token_service):
        result = await change_handler.handle(change(user.id, current="Wrong123!"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        token_service.revoke_all.assert_not_called()

    async def test_confirmation_mismatch(self, change_handler, user):
        result = await change_handler.handle(change(user.id, confirm="Different123!"))

        assert result.error.code == ErrorCode.PASSWORD_MISMATCH
        assert result.error.field == "confirm_password"

    async def test_same_as_current_rejected(self, change_handler, user):
        result = await change_handler.handle(change(user.id, new="Current123!"))

        assert result.error.code == ErrorCode.PASSWORD_MISMATCH

    async def test_weak_password_rejected(self, change_handler, user):
        result = await change_handler.handle(change(user.id, new="weak"))

        assert result.error.code == ErrorCode.PASSWORD_POLICY_VIOLATION

    async def test_last_five_passwords_rejected(
        self, change_handler, user, password_service
    ):
        """Test cycling back through recent passwords is refused."""
        # Arrange
        current = "Current123!"
        for i in range(5):
            new = f"Rotated{i}!Aa"
            result = await change_handler.handle(change(user.id, current=current, new=new))
            assert isinstance(result, Success)
            current = new

        # Act
        reuse_recent = await change_handler.handle(
            change(user.id, current=current, new="Rotated0!Aa")
        )

        # Assert
        assert reuse_recent.error.code == ErrorCode.PASSWORD_HISTORY_VIOLATION

    async def test_audited(self, user, password_service, policy_service, token_service):
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = user
        audit = AsyncMock()
        handler = ChangePasswordHandler(
            user_repo=user_repo,
            password_service=password_service,
            policy_service=policy_service,
            token_service=token_service,
            audit=audit,
            logger=Mock(),
        )

        await handler.handle(change(user.id))

        assert audit.action.await_args.kwargs["action"] == AuditAction.PASSWORD_CHANGED

    async def test_unexpected_error_hidden(self, change_handler, user, token_service):
        """Test a failing user store surfaces as AUTHENTICATION_FAILED."""
        # Arrange
        change_handler._user_repo.update.side_effect = ConnectionError("db down")

        # Act
        result = await change_handler.handle(change(user.id))

        # Assert
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.AUTHENTICATION_FAILED
        audited = change_handler._audit.unexpected_error.await_args.kwargs
        assert audited["operation"] == "change_password"
        assert audited["user_id"] == user.id
        token_service.revoke_all.assert_not_called()

    async def test_store_timeout_becomes_authentication_failed(
        self, change_handler, user, token_service
    ):
        # Arrange
        async def slow_revoke(*args, **kwargs):
            await asyncio.sleep(1)

        token_service.revoke_all.side_effect = slow_revoke
        change_handler._store_timeout = 0.01

        # Act
        result = await change_handler.handle(change(user.id))

        # Assert
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.AUTHENTICATION_FAILED


@pytest.mark.unit
class TestResetUserPassword:
    """Test administrative password reset."""

    async def test_reset_forces_change_and_revokes_all(
        self, user, password_service, policy_service, token_service
    ):
        # Arrange
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = user
        handler = ResetUserPasswordHandler(
            user_repo=user_repo,
            password_service=password_service,
            policy_service=policy_service,
            token_service=token_service,
            audit=AsyncMock(),
            logger=Mock(),
        )

        # Act
        result = await handler.handle(
            ResetUserPassword(user_id=user.id, new_password="ResetPass123!")
        )

        # Assert
        assert result == Success(value=3)
        assert user.require_password_change is True
        token_service.revoke_all.assert_awaited_once_with(user.id, REASON_PASSWORD_RESET)

    async def test_unknown_user(self, password_service, policy_service, token_service):
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = None
        handler = ResetUserPasswordHandler(
            user_repo=user_repo,
            password_service=password_service,
            policy_service=policy_service,
            token_service=token_service,
            audit=AsyncMock(),
            logger=Mock(),
        )

        result = await handler.handle(
            ResetUserPassword(user_id=uuid7(), new_password="ResetPass123!")
        )

        assert result.error.code == ErrorCode.USER_NOT_FOUND

    async def test_unexpected_error_hidden(
        self, user, password_service, policy_service, token_service
    ):
        # Arrange
        user_repo = AsyncMock()
        user_repo.find_by_id.side_effect = ConnectionError("db down")
        audit = AsyncMock()
        handler = ResetUserPasswordHandler(
            user_repo=user_repo,
            password_service=password_service,
            policy_service=policy_service,
            token_service=token_service,
            audit=audit,
            logger=Mock(),
        )

        # Act
        result = await handler.handle(
            ResetUserPassword(user_id=user.id, new_password="ResetPass123!")
        )

        # Assert
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.AUTHENTICATION_FAILED
        assert audit.unexpected_error.await_args.kwargs["operation"] == "reset_password"
        token_service.revoke_all.assert_not_called()
