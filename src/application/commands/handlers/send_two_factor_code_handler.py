"""Send two-factor code handler.

Delivers the current TOTP code by email or SMS. Authenticator-app users
read codes from their app, so nothing is sent for them.
"""

import asyncio

from src.application.commands.handlers.enable_two_factor_handler import (
    delivery_destination,
)
from src.application.commands.two_factor_commands import SendTwoFactorCode
from src.application.services.audit_trail import AuditTrail
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationError
from src.domain.protocols import (
    LoggerProtocol,
    NotificationProtocol,
    TotpProtocol,
    TwoFactorSettingsRepository,
    UserRepository,
)


class SendTwoFactorCodeHandler:
    """Handler for delivering a code over email or SMS."""

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        two_factor_repo: TwoFactorSettingsRepository,
        totp_service: TotpProtocol,
        notification_service: NotificationProtocol,
        audit: AuditTrail,
        logger: LoggerProtocol,
        store_timeout_seconds: float = 10.0,
    ) -> None:
        self._user_repo = user_repo
        self._two_factor_repo = two_factor_repo
        self._totp = totp_service
        self._notification = notification_service
        self._audit = audit
        self._logger = logger
        self._store_timeout = store_timeout_seconds

    async def handle(self, cmd: SendTwoFactorCode) -> Result[None, DomainError]:
        """Send the current code.

        Returns:
            Success(None) once handed to the sender.
            Failure(TWO_FACTOR_NOT_ENABLED) if 2FA is off.
            Failure(VALIDATION_FAILED) for authenticator-app users or a
            missing destination.
            The sender's Failure, or Failure(NOTIFICATION_FAILED) if the
            sender raises.
            Failure(AUTHENTICATION_FAILED) on an unexpected error.
        """
        try:
            async with asyncio.timeout(self._store_timeout):
                return await self._send(cmd)
        except Exception as e:
            self._logger.error(
                "send_two_factor_code_unexpected_error",
                error=e,
                user_id=str(cmd.user_id),
            )
            await self._audit.unexpected_error(
                operation="send_two_factor_code", user_id=cmd.user_id
            )
            return Failure(error=AuthenticationError.unexpected())

    async def _send(self, cmd: SendTwoFactorCode) -> Result[None, DomainError]:
        user = await self._user_repo.find_by_id(cmd.user_id)
        settings = await self._two_factor_repo.find_by_user_id(cmd.user_id)
        if user is None or settings is None or not settings.is_enabled:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TWO_FACTOR_NOT_ENABLED,
                    message=AuthenticationError.TWO_FACTOR_NOT_ENABLED,
                )
            )

        destination = delivery_destination(user, settings.method)
        if not settings.method.requires_delivery or not destination:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="Codes for this method are not delivered",
                    field="method",
                )
            )

        try:
            sent = await self._notification.send_code(
                destination,
                self._totp.current_code(settings.secret_key),
                settings.method,
            )
        except Exception as e:
            self._logger.warning(
                "two_factor_code_delivery_failed",
                user_id=str(user.id),
                method=settings.method.value,
                error=e,
            )
            return Failure(
                error=DomainError(
                    code=ErrorCode.NOTIFICATION_FAILED,
                    message="Code delivery failed",
                )
            )
        if isinstance(sent, Failure):
            self._logger.warning(
                "two_factor_code_delivery_failed",
                user_id=str(user.id),
                method=settings.method.value,
                error_code=sent.error.code.value,
            )
            return sent

        self._logger.info(
            "two_factor_code_sent", user_id=str(user.id), method=settings.method.value
        )
        return Success(value=None)
