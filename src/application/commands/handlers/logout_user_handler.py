"""Logout User handler.

Flow:
1. With a token: validate it, require it to belong to the user, revoke its
   session
2. Without a token: revoke every active session of the user
3. Record the action in the audit trail
4. Return Success(number of sessions revoked)

Revocation is immediate: the next validation of a revoked token fails.
"""

import asyncio

from src.application.commands.auth_commands import LogoutUser
from src.application.services.audit_trail import AuditTrail
from src.application.services.session_token_service import (
    REASON_LOGOUT,
    REASON_LOGOUT_ALL,
    SessionTokenService,
)
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction
from src.domain.errors import AuthenticationError
from src.domain.protocols import LoggerProtocol


class LogoutUserHandler:
    """Handler for logout user command."""

    def __init__(
        self,
        *,
        token_service: SessionTokenService,
        audit: AuditTrail,
        logger: LoggerProtocol,
        store_timeout_seconds: float = 10.0,
    ) -> None:
        self._token_service = token_service
        self._audit = audit
        self._logger = logger
        self._store_timeout = store_timeout_seconds

    async def handle(self, cmd: LogoutUser) -> Result[int, AuthenticationError]:
        """Handle logout user command.

        Args:
            cmd: LogoutUser command.

        Returns:
            Success(revoked_count) on success.
            Failure(TOKEN_INVALID) if the token is invalid or belongs to
            another user.
            Failure(AUTHENTICATION_FAILED) on an unexpected error.
        """
        try:
            async with asyncio.timeout(self._store_timeout):
                return await self._logout(cmd)
        except Exception as e:
            self._logger.error("logout_unexpected_error", error=e, user_id=str(cmd.user_id))
            await self._audit.unexpected_error(
                operation="logout",
                user_id=cmd.user_id,
                ip_address=cmd.context.ip_address,
                user_agent=cmd.context.user_agent,
            )
            return Failure(error=AuthenticationError.unexpected())

    async def _logout(self, cmd: LogoutUser) -> Result[int, AuthenticationError]:
        if cmd.access_token is None:
            count = await self._token_service.revoke_all(
                cmd.user_id, REASON_LOGOUT_ALL
            )
            await self._audit.action(
                action=AuditAction.USER_LOGOUT_ALL,
                user_id=cmd.user_id,
                context={"revoked_count": count},
                ip_address=cmd.context.ip_address,
                user_agent=cmd.context.user_agent,
            )
            return Success(value=count)

        validated = await self._token_service.validate(cmd.access_token)
        if isinstance(validated, Failure):
            return validated
        claims = validated.value
        if claims.user_id != cmd.user_id:
            self._logger.warning(
                "logout_token_user_mismatch",
                user_id=str(cmd.user_id),
                session_id=str(claims.session_id),
            )
            return Failure(error=AuthenticationError.token_invalid())

        revoked = await self._token_service.revoke(claims.session_id, REASON_LOGOUT)
        await self._audit.action(
            action=AuditAction.USER_LOGOUT,
            user_id=cmd.user_id,
            context={"session_id": str(claims.session_id)},
            ip_address=cmd.context.ip_address,
            user_agent=cmd.context.user_agent,
        )
        return Success(value=1 if revoked else 0)
