"""Unlock account handler (administrative).

Lifts a temporary lockout or an administrative block: status ACTIVE, no
lockout window, failure counter at zero.
"""

import asyncio

from src.application.commands.auth_commands import UnlockAccount
from src.application.services.audit_trail import AuditTrail
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction, UserStatus
from src.domain.errors import AuthenticationError
from src.domain.policies import AccountLockoutPolicy
from src.domain.protocols import LoggerProtocol, UserRepository


class UnlockAccountHandler:
    """Handler for administrative account unlock."""

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        lockout_policy: AccountLockoutPolicy,
        audit: AuditTrail,
        logger: LoggerProtocol,
        store_timeout_seconds: float = 10.0,
    ) -> None:
        self._user_repo = user_repo
        self._lockout = lockout_policy
        self._audit = audit
        self._logger = logger
        self._store_timeout = store_timeout_seconds

    async def handle(self, cmd: UnlockAccount) -> Result[None, DomainError]:
        """Unlock a BLOCKED account.

        Returns:
            Success(None) once unlocked.
            Failure(USER_NOT_FOUND) if the user does not exist.
            Failure(VALIDATION_FAILED) if the account is not BLOCKED.
            Failure(AUTHENTICATION_FAILED) on an unexpected error.
        """
        try:
            async with asyncio.timeout(self._store_timeout):
                return await self._unlock(cmd)
        except Exception as e:
            self._logger.error(
                "unlock_account_unexpected_error", error=e, user_id=str(cmd.user_id)
            )
            await self._audit.unexpected_error(
                operation="unlock_account",
                user_id=cmd.user_id,
            )
            return Failure(error=AuthenticationError.unexpected())

    async def _unlock(self, cmd: UnlockAccount) -> Result[None, DomainError]:
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

        if user.status != UserStatus.BLOCKED:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="Account is not locked",
                    field="status",
                )
            )

        self._lockout.unlock(user)
        await self._user_repo.update(user)

        self._logger.info(
            "account_unlocked",
            user_id=str(user.id),
            performed_by=str(cmd.performed_by) if cmd.performed_by else None,
        )
        await self._audit.action(
            action=AuditAction.ACCOUNT_UNLOCKED,
            user_id=user.id,
            context={
                "performed_by": str(cmd.performed_by) if cmd.performed_by else None
            },
        )
        return Success(value=None)
