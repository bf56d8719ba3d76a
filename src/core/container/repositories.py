"""Repository dependency factories.

Repository instances bound to one AsyncSession (one unit of work).
"""

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

if TYPE_CHECKING:
    from src.infrastructure.persistence.repositories import (
        PasswordHistoryRepository,
        SessionRepository,
        SQLRolePermissionLookup,
        TwoFactorSettingsRepository,
        UserRepository,
    )


def get_user_repository(session: AsyncSession) -> "UserRepository":
    from src.infrastructure.persistence.repositories import UserRepository

    return UserRepository(session=session)


def get_session_repository(session: AsyncSession) -> "SessionRepository":
    from src.infrastructure.persistence.repositories import SessionRepository

    return SessionRepository(session=session)


def get_two_factor_settings_repository(
    session: AsyncSession,
) -> "TwoFactorSettingsRepository":
    from src.infrastructure.persistence.repositories import (
        TwoFactorSettingsRepository,
    )

    return TwoFactorSettingsRepository(session=session)


def get_password_history_repository(
    session: AsyncSession,
) -> "PasswordHistoryRepository":
    from src.infrastructure.persistence.repositories import PasswordHistoryRepository

    return PasswordHistoryRepository(session=session)


def get_role_permission_lookup(session: AsyncSession) -> "SQLRolePermissionLookup":
    from src.infrastructure.persistence.repositories import SQLRolePermissionLookup

    return SQLRolePermissionLookup(session=session)
