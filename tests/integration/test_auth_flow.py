"""End-to-end authentication flows through the container wiring.

Tests cover:
- Login, token validation, refresh rotation and logout on a real database
- Lockout after repeated failures and administrative unlock
- Password change revoking the other sessions
- Schema verification used by the init script

Architecture:
- Handlers built by ``src.core.container`` factories, bound to one
  AsyncSession on a fresh SQLite file
"""

import pytest

from src.application.commands import (
    AuthenticateUser,
    ChangePassword,
    LogoutUser,
    RefreshAccessToken,
    UnlockAccount,
)
from src.application.dtos import AuthSucceeded
from src.core.container import (
    get_authenticate_user_handler,
    get_change_password_handler,
    get_logout_user_handler,
    get_password_service,
    get_refresh_token_handler,
    get_session_token_service,
    get_unlock_account_handler,
    get_user_repository,
)
from src.core.enums import ErrorCode
from src.core.init_db import verify_tables
from src.core.result import Failure, Success
from src.domain.enums import UserStatus
from tests.conftest import create_user

PASSWORD = "SecurePass123!"


async def register(db_session, **kwargs):
    user = create_user(
        password_hash=get_password_service().hash_password(PASSWORD), **kwargs
    )
    await get_user_repository(db_session).save(user)
    return user


@pytest.mark.integration
class TestLoginFlow:
    """Test the login, refresh and logout lifecycle."""

    async def test_login_refresh_logout(self, db_session):
        # Arrange
        user = await register(db_session)
        tokens_service = get_session_token_service(db_session)

        # Act: login by email, different case
        login = await get_authenticate_user_handler(db_session).handle(
            AuthenticateUser(identifier="ALICE@example.com", password=PASSWORD)
        )

        # Assert
        assert isinstance(login, Success)
        assert isinstance(login.value, AuthSucceeded)
        first = login.value.tokens
        claims = await tokens_service.validate(first.access_token)
        assert isinstance(claims, Success)
        assert claims.value.user_id == user.id
        assert claims.value.session_id == first.session_id

        # Act: refresh rotates the session
        refreshed = await get_refresh_token_handler(db_session).handle(
            RefreshAccessToken(
                access_token=first.access_token, refresh_token=first.refresh_token
            )
        )

        # Assert
        assert isinstance(refreshed, Success)
        second = refreshed.value
        assert second.session_id != first.session_id
        assert isinstance(await tokens_service.validate(first.access_token), Failure)

        # Act: logout ends the new session
        logout = await get_logout_user_handler(db_session).handle(
            LogoutUser(user_id=user.id, access_token=second.access_token)
        )

        # Assert
        assert logout == Success(value=1)
        assert isinstance(await tokens_service.validate(second.access_token), Failure)

    async def test_unknown_and_wrong_password_look_identical(self, db_session):
        await register(db_session)
        handler = get_authenticate_user_handler(db_session)

        unknown = await handler.handle(AuthenticateUser(identifier="bob", password=PASSWORD))
        wrong = await handler.handle(AuthenticateUser(identifier="alice", password="Nope123!x"))

        assert unknown.error.code == ErrorCode.INVALID_CREDENTIALS
        assert wrong.error.code == ErrorCode.INVALID_CREDENTIALS
        assert unknown.error.message == wrong.error.message


@pytest.mark.integration
class TestLockoutFlow:
    """Test lockout persistence and administrative unlock."""

    async def test_lockout_then_unlock(self, db_session):
        # Arrange
        user = await register(db_session)
        handler = get_authenticate_user_handler(db_session)

        # Act: five failures lock the account
        for _ in range(5):
            await handler.handle(AuthenticateUser(identifier="alice", password="Wrong123!x"))
        locked = await handler.handle(AuthenticateUser(identifier="alice", password=PASSWORD))

        # Assert
        assert locked.error.code == ErrorCode.ACCOUNT_LOCKED
        assert locked.error.lockout_remaining is not None
        stored = await get_user_repository(db_session).find_by_id(user.id)
        assert stored.status == UserStatus.BLOCKED

        # Act: administrator unlocks
        unlocked = await get_unlock_account_handler(db_session).handle(
            UnlockAccount(user_id=user.id)
        )
        again = await handler.handle(AuthenticateUser(identifier="alice", password=PASSWORD))

        # Assert
        assert unlocked == Success(value=None)
        assert isinstance(again.value, AuthSucceeded)


@pytest.mark.integration
class TestChangePasswordFlow:
    """Test password change keeps only the current session."""

    async def test_other_sessions_revoked(self, db_session):
        # Arrange
        user = await register(db_session)
        login = get_authenticate_user_handler(db_session)
        current = (
            await login.handle(AuthenticateUser(identifier="alice", password=PASSWORD))
        ).value.tokens
        other = (
            await login.handle(AuthenticateUser(identifier="alice", password=PASSWORD))
        ).value.tokens

        # Act
        result = await get_change_password_handler(db_session).handle(
            ChangePassword(
                user_id=user.id,
                current_password=PASSWORD,
                new_password="Changed123!x",
                confirm_password="Changed123!x",
                current_session_id=current.session_id,
            )
        )

        # Assert
        assert result == Success(value=1)
        tokens_service = get_session_token_service(db_session)
        assert isinstance(await tokens_service.validate(current.access_token), Success)
        assert isinstance(await tokens_service.validate(other.access_token), Failure)
        relogin = await login.handle(
            AuthenticateUser(identifier="alice", password="Changed123!x")
        )
        assert isinstance(relogin.value, AuthSucceeded)


@pytest.mark.integration
class TestSchema:
    """Test the init script's table check."""

    async def test_all_tables_present(self, database):
        assert await verify_tables(database) == []
