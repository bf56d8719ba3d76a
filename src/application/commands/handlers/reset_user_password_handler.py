"""Reset user password handler (administrative).

Same strength and history checks as a user-initiated change. The user must
change the password at the next login and every session is revoked.
"""

import asyncio
from datetime import UTC, datetime

from src.application.commands.password_commands import ResetUserPassword
from src.application.services.audit_trail import AuditTrail
from src.application.services.password_policy_service import PasswordPolicyService
from src.application.services.session_token_service import (
    REASON_PASSWORD_RESET,
    SessionTokenService,
)
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction
from src.domain.errors import AuthenticationError
from src.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class ResetUserPasswordHandler:
    """Handler for administrative password reset."""

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        policy_service: PasswordPolicyService,
        token_service: SessionTokenService,
        audit: AuditTrail,
        logger: LoggerProtocol,
        store_timeout_seconds: float = 10.0,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._policy_service = policy_service
        self._token_service = token_service
        self._audit = audit
        self._logger = logger
        self._store_timeout = store_timeout_seconds

    async def handle(self, cmd: ResetUserPassword) -> Result[int, DomainError]:
        """Handle reset password command.

        Returns:
            Success(revoked_session_count) on success.
            Failure(USER_NOT_FOUND), Failure(PASSWORD_POLICY_VIOLATION) or
            Failure(PASSWORD_HISTORY_VIOLATION).
            Failure(AUTHENTICATION_FAILED) on an unexpected error.
        """
        try:
            async with asyncio.timeout(self._store_timeout):
                return await self._reset(cmd)
        except Exception as e:
            self._logger.error(
                "reset_password_unexpected_error", error=e, user_id=str(cmd.user_id)
            )
            await self._audit.unexpected_error(
                operation="reset_password",
                user_id=cmd.user_id,
                ip_address=cmd.context.ip_address,
                user_agent=cmd.context.user_agent,
            )
            return Failure(error=AuthenticationError.unexpected())

    async def _reset(self, cmd: ResetUserPassword) -> Result[int, DomainError]:
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(cmd.user_id),
                )
            )

        validated = self._policy_service.validate(cmd.new_password)
        if isinstance(validated, Failure):
            return validated

        unused = await self._policy_service.check_history(user.id, cmd.new_password)
        if isinstance(unused, Failure):
            return unused

        now = datetime.now(UTC)
        new_hash = self._password_service.hash_password(cmd.new_password)
        user.reset_password(new_hash, now)
        await self._user_repo.update(user)
        await self._policy_service.record(user.id, new_hash, context=cmd.context, now=now)

        revoked = await self._token_service.revoke_all(user.id, REASON_PASSWORD_RESET)

        self._logger.info(
            "password_reset", user_id=str(user.id), revoked_sessions=revoked
        )
        await self._audit.action(
            action=AuditAction.PASSWORD_RESET,
            user_id=user.id,
            context={"revoked_sessions": revoked},
            ip_address=cmd.context.ip_address,
            user_agent=cmd.context.user_agent,
        )
        return Success(value=revoked)
