"""Verify two-factor handler.

Completes a login that returned a TwoFactorChallenge.

Flow:
1. Load user; release an expired lockout; require status ACTIVE
2. Load enabled 2FA settings
3. Accept a TOTP code (counter-1..counter+1) or consume an unused recovery
   code (single use)
4. On failure count the attempt against the lockout threshold
5. On success reset failures, start a session, return AuthSucceeded
"""

import asyncio
from datetime import UTC, datetime

from src.application.commands.two_factor_commands import VerifyTwoFactor
from src.application.dtos.auth_dtos import AuthSucceeded
from src.application.services.audit_trail import AuditTrail
from src.application.services.session_token_service import SessionTokenService
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction, UserStatus
from src.domain.errors import AuthenticationError
from src.domain.policies import AccountLockoutPolicy
from src.domain.protocols import (
    LoggerProtocol,
    RefreshTokenServiceProtocol,
    TotpProtocol,
    TwoFactorSettingsRepository,
    UserRepository,
)


class VerifyTwoFactorHandler:
    """Handler for second-factor verification."""

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        two_factor_repo: TwoFactorSettingsRepository,
        totp_service: TotpProtocol,
        code_hasher: RefreshTokenServiceProtocol,
        token_service: SessionTokenService,
        lockout_policy: AccountLockoutPolicy,
        audit: AuditTrail,
        logger: LoggerProtocol,
        store_timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize handler.

        Args:
            code_hasher: Verifies presented codes against the stored hashes.
            store_timeout_seconds: Upper bound for the store round-trips of
                one verification.
        """
        self._user_repo = user_repo
        self._two_factor_repo = two_factor_repo
        self._totp = totp_service
        self._code_hasher = code_hasher
        self._token_service = token_service
        self._lockout = lockout_policy
        self._audit = audit
        self._logger = logger
        self._store_timeout = store_timeout_seconds

    async def handle(
        self, cmd: VerifyTwoFactor
    ) -> Result[AuthSucceeded, AuthenticationError]:
        """Verify the code and start a session.

        Returns:
            Success(AuthSucceeded) on a valid code.
            Failure(INVALID_TWO_FACTOR_CODE) on a wrong code.
            Failure(TWO_FACTOR_NOT_ENABLED) if 2FA is not enabled.
            A status-specific failure if the account is not ACTIVE.
        """
        try:
            async with asyncio.timeout(self._store_timeout):
                result = await self._verify(cmd)
        except Exception as e:
            self._logger.error(
                "two_factor_unexpected_error", error=e, user_id=str(cmd.user_id)
            )
            result = Failure(error=AuthenticationError.unexpected())

        await self._audit.attempt(
            action=AuditAction.TWO_FACTOR_VERIFIED
            if isinstance(result, Success)
            else AuditAction.TWO_FACTOR_FAILED,
            identifier=None,
            succeeded=isinstance(result, Success),
            user_id=cmd.user_id,
            reason=result.error.code.value if isinstance(result, Failure) else None,
            ip_address=cmd.context.ip_address,
            user_agent=cmd.context.user_agent,
        )
        return result

    async def _verify(
        self, cmd: VerifyTwoFactor
    ) -> Result[AuthSucceeded, AuthenticationError]:
        now = datetime.now(UTC)

        # Step 1: User state
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(error=AuthenticationError.invalid_credentials())

        if self._lockout.release_if_expired(user, now):
            await self._user_repo.update(user)
        if user.status != UserStatus.ACTIVE:
            remaining = (
                self._lockout.remaining(user, now)
                if user.status == UserStatus.BLOCKED
                else None
            )
            return Failure(error=AuthenticationError.for_status(user.status, remaining))

        # Step 2: Settings
        settings = await self._two_factor_repo.find_by_user_id(user.id)
        if settings is None or not settings.is_enabled or not user.two_factor_enabled:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TWO_FACTOR_NOT_ENABLED,
                    message=AuthenticationError.TWO_FACTOR_NOT_ENABLED,
                )
            )

        # Step 3: TOTP code, then recovery code
        code = cmd.code.strip()
        if not self._totp.validate_code(settings.secret_key, code, now):
            matched = self._match_recovery_code(settings.recovery_codes, code)
            if matched is None or not settings.consume_recovery_code(matched, now):
                # Step 4: Count the failure
                locked = self._lockout.register_failure(user, now)
                await self._user_repo.update(user)
                if locked:
                    self._logger.warning("account_locked", user_id=str(user.id))
                return Failure(
                    error=AuthenticationError(
                        code=ErrorCode.INVALID_TWO_FACTOR_CODE,
                        message=AuthenticationError.INVALID_TWO_FACTOR_CODE,
                    )
                )

            await self._two_factor_repo.save(settings)
            self._logger.info(
                "recovery_code_used",
                user_id=str(user.id),
                remaining=settings.remaining_recovery_codes,
            )
            await self._audit.action(
                action=AuditAction.TWO_FACTOR_RECOVERY_CODE_USED,
                user_id=user.id,
                context={"remaining": settings.remaining_recovery_codes},
                ip_address=cmd.context.ip_address,
                user_agent=cmd.context.user_agent,
            )

        # Step 5: Session
        self._lockout.reset(user, now)
        await self._user_repo.update(user)

        tokens = await self._token_service.start_session(
            user, context=cmd.context, extended=cmd.remember_me
        )
        self._logger.info(
            "two_factor_login_succeeded",
            user_id=str(user.id),
            session_id=str(tokens.session_id),
        )
        return Success(
            value=AuthSucceeded(
                user_id=user.id,
                username=user.username,
                email=user.email,
                tokens=tokens,
            )
        )

    def _match_recovery_code(self, stored: list[str], code: str) -> str | None:
        """Return the stored hash matching ``code`` (case-insensitive)."""
        if not code:
            return None
        candidate = code.lower()
        return next(
            (
                code_hash
                for code_hash in stored
                if self._code_hasher.verify_token(candidate, code_hash)
            ),
            None,
        )
