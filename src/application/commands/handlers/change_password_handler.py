"""Change password handler.

Flow:
1. Load user and verify the current password
2. Require new == confirm and new != current
3. Check the strength rules
4. Check the password history (last N hashes, via the hasher)
5. Store the new hash, append it to the history (evicting the oldest)
6. Revoke every other session ("password_changed")
"""

import asyncio
from datetime import UTC, datetime

from src.application.commands.password_commands import ChangePassword
from src.application.services.audit_trail import AuditTrail
from src.application.services.password_policy_service import PasswordPolicyService
from src.application.services.session_token_service import (
    REASON_PASSWORD_CHANGED,
    SessionTokenService,
)
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction
from src.domain.errors import AuthenticationError
from src.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class ChangePasswordHandler:
    """Handler for user-initiated password change."""

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

    async def handle(self, cmd: ChangePassword) -> Result[int, DomainError]:
        """Handle change password command.

        Returns:
            Success(revoked_session_count) on success.
            Failure(INVALID_CREDENTIALS) if the current password is wrong.
            Failure(PASSWORD_MISMATCH) if confirmation differs or the new
            password equals the current one.
            Failure(PASSWORD_POLICY_VIOLATION) / Failure(PASSWORD_HISTORY_VIOLATION).
            Failure(AUTHENTICATION_FAILED) on an unexpected error.
        """
        try:
            async with asyncio.timeout(self._store_timeout):
                return await self._change(cmd)
        except Exception as e:
            self._logger.error(
                "change_password_unexpected_error", error=e, user_id=str(cmd.user_id)
            )
            await self._audit.unexpected_error(
                operation="change_password",
                user_id=cmd.user_id,
                ip_address=cmd.context.ip_address,
                user_agent=cmd.context.user_agent,
            )
            return Failure(error=AuthenticationError.unexpected())

    async def _change(self, cmd: ChangePassword) -> Result[int, DomainError]:
        # Step 1: Current password
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            self._password_service.verify_dummy(cmd.current_password)
            return Failure(error=AuthenticationError.invalid_credentials())
        if not self._password_service.verify_password(
            cmd.current_password, user.password_hash
        ):
            return Failure(error=AuthenticationError.invalid_credentials())

        # Step 2: Confirmation
        if cmd.new_password != cmd.confirm_password:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.PASSWORD_MISMATCH,
                    message="New password and confirmation do not match",
                    field="confirm_password",
                )
            )
        if cmd.new_password == cmd.current_password:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.PASSWORD_MISMATCH,
                    message="New password must differ from the current password",
                    field="new_password",
                )
            )

        # Step 3: Strength
        validated = self._policy_service.validate(cmd.new_password)
        if isinstance(validated, Failure):
            return validated

        # Step 4: History
        unused = await self._policy_service.check_history(user.id, cmd.new_password)
        if isinstance(unused, Failure):
            return unused

        # Step 5: Store
        now = datetime.now(UTC)
        new_hash = self._password_service.hash_password(cmd.new_password)
        user.change_password(new_hash, now)
        await self._user_repo.update(user)
        await self._policy_service.record(user.id, new_hash, context=cmd.context, now=now)

        # Step 6: Other sessions
        revoked = await self._token_service.revoke_all(
            user.id, REASON_PASSWORD_CHANGED, except_session_id=cmd.current_session_id
        )

        self._logger.info(
            "password_changed", user_id=str(user.id), revoked_sessions=revoked
        )
        await self._audit.action(
            action=AuditAction.PASSWORD_CHANGED,
            user_id=user.id,
            context={"revoked_sessions": revoked},
            ip_address=cmd.context.ip_address,
            user_agent=cmd.context.user_agent,
        )
        return Success(value=revoked)
