"""Refresh Access Token handler.

Flow:
1. Delegate rotation to SessionTokenService.refresh (strict access-token
   validation, refresh-token hash check, user ACTIVE, revoke old session,
   start new session)
2. Record one audit entry for the outcome
3. Return Success(IssuedTokens) or Failure(TOKEN_INVALID)

Unexpected errors surface as AUTHENTICATION_FAILED.
"""

from src.application.commands.auth_commands import RefreshAccessToken
from src.application.dtos.auth_dtos import IssuedTokens
from src.application.services.audit_trail import AuditTrail
from src.application.services.session_token_service import SessionTokenService
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction
from src.domain.errors import AuthenticationError
from src.domain.protocols import LoggerProtocol


class RefreshAccessTokenHandler:
    """Handler for refresh access token command.

    Implements token rotation: every successful refresh revokes the old
    session, so a token pair can be exchanged at most once.
    """

    def __init__(
        self,
        *,
        token_service: SessionTokenService,
        audit: AuditTrail,
        logger: LoggerProtocol,
    ) -> None:
        self._token_service = token_service
        self._audit = audit
        self._logger = logger

    async def handle(
        self, cmd: RefreshAccessToken
    ) -> Result[IssuedTokens, AuthenticationError]:
        """Handle refresh access token command.

        Args:
            cmd: RefreshAccessToken command.

        Returns:
            Success(IssuedTokens) for the new session.
            Failure(AuthenticationError) on failure.
        """
        try:
            result = await self._token_service.refresh(
                cmd.access_token, cmd.refresh_token, cmd.context
            )
        except Exception as e:
            self._logger.error(
                "token_refresh_unexpected_error",
                error=e,
                ip_address=cmd.context.ip_address,
            )
            await self._audit.attempt(
                action=AuditAction.UNEXPECTED_ERROR,
                identifier=None,
                succeeded=False,
                reason=ErrorCode.AUTHENTICATION_FAILED.value,
                ip_address=cmd.context.ip_address,
                user_agent=cmd.context.user_agent,
            )
            return Failure(error=AuthenticationError.unexpected())

        match result:
            case Success(value=tokens):
                self._logger.info(
                    "token_refreshed",
                    user_id=str(tokens.user_id),
                    session_id=str(tokens.session_id),
                )
                await self._audit.attempt(
                    action=AuditAction.SESSION_REFRESHED,
                    identifier=None,
                    succeeded=True,
                    user_id=tokens.user_id,
                    ip_address=cmd.context.ip_address,
                    user_agent=cmd.context.user_agent,
                )
            case Failure(error=error):
                self._logger.info("token_refresh_failed", reason=error.code.value)
                await self._audit.attempt(
                    action=AuditAction.SESSION_REFRESH_FAILED,
                    identifier=None,
                    succeeded=False,
                    reason=error.code.value,
                    ip_address=cmd.context.ip_address,
                    user_agent=cmd.context.user_agent,
                )

        return result
