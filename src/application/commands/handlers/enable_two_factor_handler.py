"""Enable two-factor handler.

Flow:
1. Load user; refuse if 2FA is already enabled
2. Resolve the delivery destination for EMAIL/SMS methods
3. Generate a TOTP secret and recovery codes
4. Persist settings (recovery codes hashed) and set the user flag
5. Send a first code for EMAIL/SMS (fail-open)
6. Return secret, provisioning URI and plaintext recovery codes once
"""

import asyncio
from datetime import UTC, datetime

from src.application.commands.two_factor_commands import EnableTwoFactor
from src.application.dtos.auth_dtos import TwoFactorEnrollment
from src.application.services.audit_trail import AuditTrail
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities.two_factor_settings import TwoFactorSettings
from src.domain.entities.user import User
from src.domain.enums import AuditAction, TwoFactorMethod
from src.domain.errors import AuthenticationError
from src.domain.protocols import (
    LoggerProtocol,
    NotificationProtocol,
    RefreshTokenServiceProtocol,
    TotpProtocol,
    TwoFactorSettingsRepository,
    UserRepository,
)


def delivery_destination(user: User, method: TwoFactorMethod) -> str | None:
    """Email address or phone number that receives codes for ``method``."""
    if method == TwoFactorMethod.EMAIL:
        return user.email
    if method == TwoFactorMethod.SMS:
        return user.phone_number
    return None


class EnableTwoFactorHandler:
    """Handler for enabling two-factor authentication."""

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        two_factor_repo: TwoFactorSettingsRepository,
        totp_service: TotpProtocol,
        code_hasher: RefreshTokenServiceProtocol,
        notification_service: NotificationProtocol,
        audit: AuditTrail,
        logger: LoggerProtocol,
        recovery_code_count: int = 8,
        store_timeout_seconds: float = 10.0,
    ) -> None:
        self._user_repo = user_repo
        self._two_factor_repo = two_factor_repo
        self._totp = totp_service
        self._code_hasher = code_hasher
        self._notification = notification_service
        self._audit = audit
        self._logger = logger
        self._recovery_code_count = recovery_code_count
        self._store_timeout = store_timeout_seconds

    async def handle(
        self, cmd: EnableTwoFactor
    ) -> Result[TwoFactorEnrollment, DomainError]:
        """Handle enable two-factor command.

        Returns:
            Success(TwoFactorEnrollment) once enabled.
            Failure(USER_NOT_FOUND), Failure(TWO_FACTOR_ALREADY_ENABLED) or
            Failure(VALIDATION_FAILED) when SMS is chosen without a phone number.
            Failure(AUTHENTICATION_FAILED) on an unexpected error.
        """
        try:
            async with asyncio.timeout(self._store_timeout):
                return await self._enable(cmd)
        except Exception as e:
            self._logger.error(
                "enable_two_factor_unexpected_error", error=e, user_id=str(cmd.user_id)
            )
            await self._audit.unexpected_error(
                operation="enable_two_factor", user_id=cmd.user_id
            )
            return Failure(error=AuthenticationError.unexpected())

    async def _enable(
        self, cmd: EnableTwoFactor
    ) -> Result[TwoFactorEnrollment, DomainError]:
        # Step 1: User
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
        if user.two_factor_enabled:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TWO_FACTOR_ALREADY_ENABLED,
                    message=AuthenticationError.TWO_FACTOR_ALREADY_ENABLED,
                )
            )

        # Step 2: Destination
        destination = delivery_destination(user, cmd.method)
        if cmd.method.requires_delivery and not destination:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="A phone number is required for SMS codes",
                    field="phone_number",
                )
            )

        # Step 3: Secrets
        secret_key = self._totp.generate_secret_key()
        recovery_codes = self._totp.generate_recovery_codes(self._recovery_code_count)

        # Step 4: Persist
        now = datetime.now(UTC)
        await self._two_factor_repo.save(
            TwoFactorSettings(
                user_id=user.id,
                secret_key=secret_key,
                method=cmd.method,
                recovery_codes=[
                    self._code_hasher.hash_token(code) for code in recovery_codes
                ],
                is_enabled=True,
                created_at=now,
                updated_at=now,
            )
        )
        user.enable_two_factor(now)
        await self._user_repo.update(user)

        # Step 5: First code
        if cmd.method.requires_delivery and destination:
            await self._send_first_code(user, destination, secret_key, cmd.method)

        self._logger.info(
            "two_factor_enabled", user_id=str(user.id), method=cmd.method.value
        )
        await self._audit.action(
            action=AuditAction.TWO_FACTOR_ENABLED,
            user_id=user.id,
            context={"method": cmd.method.value},
        )

        # Step 6: Enrollment data (shown once)
        return Success(
            value=TwoFactorEnrollment(
                method=cmd.method,
                secret_key=secret_key,
                provisioning_uri=self._totp.provisioning_uri(secret_key, user.email),
                recovery_codes=recovery_codes,
            )
        )

    async def _send_first_code(
        self, user: User, destination: str, secret_key: str, method: TwoFactorMethod
    ) -> None:
        """Deliver the first code. Enrollment stands even if delivery fails."""
        try:
            sent = await self._notification.send_code(
                destination, self._totp.current_code(secret_key), method
            )
        except Exception as e:
            self._logger.warning(
                "two_factor_code_delivery_failed",
                user_id=str(user.id),
                method=method.value,
                error=e,
            )
            return
        if isinstance(sent, Failure):
            self._logger.warning(
                "two_factor_code_delivery_failed",
                user_id=str(user.id),
                method=method.value,
                error_code=sent.error.code.value,
            )
