"""Disable two-factor handler.

Flow:
1. Load user and re-verify the password
2. Require 2FA to be enabled
3. Delete settings and clear the user flag
4. Revoke every session ("two_factor_disabled")
"""

import asyncio
from datetime import UTC, datetime

from src.application.commands.two_factor_commands import DisableTwoFactor
from src.application.services.audit_trail import AuditTrail
from src.application.services.session_token_service import (
    REASON_TWO_FACTOR_DISABLED,
    SessionTokenService,
)
from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction
from src.domain.errors import AuthenticationError
from src.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    TwoFactorSettingsRepository,
    UserRepository,
)


class DisableTwoFactorHandler:
    """Handler for disabling two-factor authentication."""

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        two_factor_repo: TwoFactorSettingsRepository,
        password_service: PasswordHashingProtocol,
        token_service: SessionTokenService,
        audit: AuditTrail,
        logger: LoggerProtocol,
        store_timeout_seconds: float = 10.0,
    ) -> None:
        self._user_repo = user_repo
        self._two_factor_repo = two_factor_repo
        self._password_service = password_service
        self._token_service = token_service
        self._audit = audit
        self._logger = logger
        self._store_timeout = store_timeout_seconds

    async def handle(self, cmd: DisableTwoFactor) -> Result[int, DomainError]:
        """Handle disable two-factor command.

        Returns:
            Success(revoked_session_count) once disabled.
            Failure(INVALID_CREDENTIALS) on a wrong password or unknown user.
            Failure(TWO_FACTOR_NOT_ENABLED) if 2FA is off.
            Failure(AUTHENTICATION_FAILED) on an unexpected error.
        """
        try:
            async with asyncio.timeout(self._store_timeout):
                return await self._disable(cmd)
        except Exception as e:
            self._logger.error(
                "disable_two_factor_unexpected_error", error=e, user_id=str(cmd.user_id)
            )
            await self._audit.unexpected_error(
                operation="disable_two_factor",
                user_id=cmd.user_id,
            )
            return Failure(error=AuthenticationError.unexpected())

    async def _disable(self, cmd: DisableTwoFactor) -> Result[int, DomainError]:
        # Step 1: Password re-verification
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            self._password_service.verify_dummy(cmd.password)
            return Failure(error=AuthenticationError.invalid_credentials())
        if not self._password_service.verify_password(cmd.password, user.password_hash):
            return Failure(error=AuthenticationError.invalid_credentials())

        # Step 2: Enabled?
        if not user.two_factor_enabled:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TWO_FACTOR_NOT_ENABLED,
                    message=AuthenticationError.TWO_FACTOR_NOT_ENABLED,
                )
            )

        # Step 3: Remove settings
        await self._two_factor_repo.delete(user.id)
        user.disable_two_factor(datetime.now(UTC))
        await self._user_repo.update(user)

        # Step 4: Sessions
        revoked = await self._token_service.revoke_all(
            user.id, REASON_TWO_FACTOR_DISABLED
        )

        self._logger.info(
            "two_factor_disabled", user_id=str(user.id), revoked_sessions=revoked
        )
        await self._audit.action(
            action=AuditAction.TWO_FACTOR_DISABLED,
            user_id=user.id,
            context={"revoked_sessions": revoked},
        )
        return Success(value=revoked)
