"""Authentication handler dependency factories.

Handler instances bound to one AsyncSession:
- Login, refresh, logout, unlock
- Two-factor verify, enable, disable, send code
- Password change and administrative reset
- Session listing

Usage:
    async for session in get_db_session():
        handler = get_authenticate_user_handler(session)
        result = await handler.handle(
            AuthenticateUser(identifier="alice", password="...")
        )
"""

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.infrastructure import (
    get_audit,
    get_captcha_verifier,
    get_device_enricher,
    get_jwt_service,
    get_logger,
    get_notification_service,
    get_password_service,
    get_refresh_token_service,
    get_security_policy,
    get_totp_service,
)
from src.core.container.repositories import (
    get_password_history_repository,
    get_role_permission_lookup,
    get_session_repository,
    get_two_factor_settings_repository,
    get_user_repository,
)

if TYPE_CHECKING:
    from src.application.commands.handlers import (
        AuthenticateUserHandler,
        ChangePasswordHandler,
        DisableTwoFactorHandler,
        EnableTwoFactorHandler,
        LogoutUserHandler,
        RefreshAccessTokenHandler,
        ResetUserPasswordHandler,
        SendTwoFactorCodeHandler,
        UnlockAccountHandler,
        VerifyTwoFactorHandler,
    )
    from src.application.queries.handlers import ListUserSessionsHandler
    from src.application.services import (
        AuditTrail,
        PasswordPolicyService,
        SessionTokenService,
    )
    from src.domain.policies import AccountLockoutPolicy


# ============================================================================
# Shared Application Services
# ============================================================================


def get_audit_trail() -> "AuditTrail":
    """Fail-open audit trail over the configured sink."""
    from src.application.services import AuditTrail

    return AuditTrail(audit=get_audit(), logger=get_logger())


def get_lockout_policy() -> "AccountLockoutPolicy":
    from src.domain.policies import AccountLockoutPolicy

    return AccountLockoutPolicy(get_security_policy())


def get_session_token_service(session: AsyncSession) -> "SessionTokenService":
    """Session token service bound to ``session``."""
    from src.application.services import SessionTokenService

    return SessionTokenService(
        session_repo=get_session_repository(session),
        user_repo=get_user_repository(session),
        token_service=get_jwt_service(),
        refresh_token_service=get_refresh_token_service(),
        role_lookup=get_role_permission_lookup(session),
        device_enricher=get_device_enricher(),
        policy=get_security_policy(),
        logger=get_logger(),
        store_timeout_seconds=settings.store_timeout_seconds,
    )


def get_password_policy_service(session: AsyncSession) -> "PasswordPolicyService":
    from src.application.services import PasswordPolicyService

    return PasswordPolicyService(
        policy=get_security_policy(),
        password_service=get_password_service(),
        history_repo=get_password_history_repository(session),
    )


# ============================================================================
# Authentication Handler Factories
# ============================================================================


def get_authenticate_user_handler(session: AsyncSession) -> "AuthenticateUserHandler":
    """Get AuthenticateUser command handler.

    Returns:
        AuthenticateUserHandler instance.
    """
    from src.application.commands.handlers import AuthenticateUserHandler

    return AuthenticateUserHandler(
        user_repo=get_user_repository(session),
        password_service=get_password_service(),
        token_service=get_session_token_service(session),
        lockout_policy=get_lockout_policy(),
        captcha_verifier=get_captcha_verifier(),
        audit=get_audit_trail(),
        logger=get_logger(),
        store_timeout_seconds=settings.store_timeout_seconds,
    )


def get_refresh_token_handler(session: AsyncSession) -> "RefreshAccessTokenHandler":
    from src.application.commands.handlers import RefreshAccessTokenHandler

    return RefreshAccessTokenHandler(
        token_service=get_session_token_service(session),
        audit=get_audit_trail(),
        logger=get_logger(),
    )


def get_logout_user_handler(session: AsyncSession) -> "LogoutUserHandler":
    from src.application.commands.handlers import LogoutUserHandler

    return LogoutUserHandler(
        token_service=get_session_token_service(session),
        audit=get_audit_trail(),
        logger=get_logger(),
        store_timeout_seconds=settings.store_timeout_seconds,
    )


def get_unlock_account_handler(session: AsyncSession) -> "UnlockAccountHandler":
    from src.application.commands.handlers import UnlockAccountHandler

    return UnlockAccountHandler(
        user_repo=get_user_repository(session),
        lockout_policy=get_lockout_policy(),
        audit=get_audit_trail(),
        logger=get_logger(),
        store_timeout_seconds=settings.store_timeout_seconds,
    )


def get_verify_two_factor_handler(session: AsyncSession) -> "VerifyTwoFactorHandler":
    from src.application.commands.handlers import VerifyTwoFactorHandler

    return VerifyTwoFactorHandler(
        user_repo=get_user_repository(session),
        two_factor_repo=get_two_factor_settings_repository(session),
        totp_service=get_totp_service(),
        code_hasher=get_refresh_token_service(),
        token_service=get_session_token_service(session),
        lockout_policy=get_lockout_policy(),
        audit=get_audit_trail(),
        logger=get_logger(),
        store_timeout_seconds=settings.store_timeout_seconds,
    )


def get_enable_two_factor_handler(session: AsyncSession) -> "EnableTwoFactorHandler":
    from src.application.commands.handlers import EnableTwoFactorHandler

    return EnableTwoFactorHandler(
        user_repo=get_user_repository(session),
        two_factor_repo=get_two_factor_settings_repository(session),
        totp_service=get_totp_service(),
        code_hasher=get_refresh_token_service(),
        notification_service=get_notification_service(),
        audit=get_audit_trail(),
        logger=get_logger(),
        recovery_code_count=get_security_policy().recovery_code_count,
        store_timeout_seconds=settings.store_timeout_seconds,
    )


def get_disable_two_factor_handler(
    session: AsyncSession,
) -> "DisableTwoFactorHandler":
    from src.application.commands.handlers import DisableTwoFactorHandler

    return DisableTwoFactorHandler(
        user_repo=get_user_repository(session),
        two_factor_repo=get_two_factor_settings_repository(session),
        password_service=get_password_service(),
        token_service=get_session_token_service(session),
        audit=get_audit_trail(),
        logger=get_logger(),
        store_timeout_seconds=settings.store_timeout_seconds,
    )


def get_send_two_factor_code_handler(
    session: AsyncSession,
) -> "SendTwoFactorCodeHandler":
    from src.application.commands.handlers import SendTwoFactorCodeHandler

    return SendTwoFactorCodeHandler(
        user_repo=get_user_repository(session),
        two_factor_repo=get_two_factor_settings_repository(session),
        totp_service=get_totp_service(),
        notification_service=get_notification_service(),
        audit=get_audit_trail(),
        logger=get_logger(),
        store_timeout_seconds=settings.store_timeout_seconds,
    )


def get_change_password_handler(session: AsyncSession) -> "ChangePasswordHandler":
    from src.application.commands.handlers import ChangePasswordHandler

    return ChangePasswordHandler(
        user_repo=get_user_repository(session),
        password_service=get_password_service(),
        policy_service=get_password_policy_service(session),
        token_service=get_session_token_service(session),
        audit=get_audit_trail(),
        logger=get_logger(),
        store_timeout_seconds=settings.store_timeout_seconds,
    )


def get_reset_user_password_handler(
    session: AsyncSession,
) -> "ResetUserPasswordHandler":
    from src.application.commands.handlers import ResetUserPasswordHandler

    return ResetUserPasswordHandler(
        user_repo=get_user_repository(session),
        password_service=get_password_service(),
        policy_service=get_password_policy_service(session),
        token_service=get_session_token_service(session),
        audit=get_audit_trail(),
        logger=get_logger(),
        store_timeout_seconds=settings.store_timeout_seconds,
    )


def get_list_sessions_handler(session: AsyncSession) -> "ListUserSessionsHandler":
    from src.application.queries.handlers import ListUserSessionsHandler

    return ListUserSessionsHandler(session_repo=get_session_repository(session))
