"""Authenticate user handler.

Verifies credentials, drives the account lockout state machine and starts a
session when no second factor is required.

Flow (short-circuits on the first failure):
1. Validate CAPTCHA proof (if supplied)
2. Find user by username or email (case-insensitive)
3. Release an expired lockout, then require status ACTIVE
4. Verify password; on mismatch count the failure (may lock) and persist
5. On match reset the failure counter, stamp last login and persist
6. Require a confirmed email
7. If 2FA is enabled return a TwoFactorChallenge (no token, no session)
8. Otherwise start a session and return AuthSucceeded

Every outcome is recorded with exactly one audit call. Unknown identifiers
and wrong passwords both return INVALID_CREDENTIALS, and unknown identifiers
still run one bcrypt verification so response times do not reveal which
accounts exist.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, policies)
- NO infrastructure imports (repositories are injected via protocols)
"""

import asyncio
from datetime import UTC, datetime
from uuid import UUID

from src.application.commands.auth_commands import AuthenticateUser
from src.application.dtos.auth_dtos import AuthSucceeded, TwoFactorChallenge
from src.application.services.audit_trail import AuditTrail
from src.application.services.session_token_service import SessionTokenService
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.enums import AuditAction, UserStatus
from src.domain.errors import AuthenticationError
from src.domain.policies import AccountLockoutPolicy
from src.domain.protocols import (
    CaptchaVerifierProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)

type LoginOutcome = Result[AuthSucceeded | TwoFactorChallenge, AuthenticationError]


class AuthenticateUserHandler:
    """Handler for the login command.

    Follows hexagonal architecture:
    - Application layer (this handler)
    - Domain layer (User entity, lockout policy, protocols)
    - Infrastructure layer (repositories, hasher, CAPTCHA via dependency injection)
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: SessionTokenService,
        lockout_policy: AccountLockoutPolicy,
        captcha_verifier: CaptchaVerifierProtocol,
        audit: AuditTrail,
        logger: LoggerProtocol,
        store_timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize authentication handler with dependencies.

        Args:
            user_repo: User repository for persistence.
            password_service: Password hashing/verification service.
            token_service: Session token service (starts sessions).
            lockout_policy: Failed-attempt lockout rules.
            captcha_verifier: CAPTCHA collaborator.
            audit: Fail-open audit trail.
            logger: Structured logger.
            store_timeout_seconds: Upper bound for each store call.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_service = token_service
        self._lockout = lockout_policy
        self._captcha = captcha_verifier
        self._audit = audit
        self._logger = logger
        self._store_timeout = store_timeout_seconds

    async def handle(self, cmd: AuthenticateUser) -> LoginOutcome:
        """Handle user authentication command.

        Args:
            cmd: AuthenticateUser command.

        Returns:
            Success(AuthSucceeded) when a session was started.
            Success(TwoFactorChallenge) when the second factor is pending.
            Failure(AuthenticationError) otherwise.

        Side Effects:
            - Updates failure counter / lockout state on wrong password.
            - Resets failure counter and stamps last login on correct password.
            - Creates a session on full success.
            - Records one audit entry.
        """
        user_id: UUID | None = None
        try:
            result, user_id = await self._authenticate(cmd)
        except Exception as e:
            # Store outage, timeout or crypto failure: hide internals from caller
            self._logger.error(
                "login_unexpected_error",
                error=e,
                user_id=str(user_id) if user_id else None,
                ip_address=cmd.context.ip_address,
            )
            await self._audit.attempt(
                action=AuditAction.UNEXPECTED_ERROR,
                identifier=cmd.identifier,
                succeeded=False,
                reason=ErrorCode.AUTHENTICATION_FAILED.value,
                ip_address=cmd.context.ip_address,
                user_agent=cmd.context.user_agent,
            )
            return Failure(error=AuthenticationError.unexpected())

        await self._record_outcome(cmd, result, user_id)
        return result

    async def _authenticate(
        self, cmd: AuthenticateUser
    ) -> tuple[LoginOutcome, UUID | None]:
        context = cmd.context

        # Step 1: CAPTCHA
        if context.captcha_proof is not None and not await self._captcha.validate(
            context.captcha_proof, context.ip_address
        ):
            return (
                Failure(
                    error=AuthenticationError(
                        code=ErrorCode.RECAPTCHA_FAILED,
                        message=AuthenticationError.RECAPTCHA_FAILED,
                    )
                ),
                None,
            )

        # Step 2: Resolve user
        async with asyncio.timeout(self._store_timeout):
            user = await self._user_repo.find_by_identifier(cmd.identifier)

        if user is None:
            # Equalize timing with the wrong-password path
            self._password_service.verify_dummy(cmd.password)
            self._logger.info("login_failed", reason="unknown_identifier")
            return Failure(error=AuthenticationError.invalid_credentials()), None

        now = datetime.now(UTC)

        # Step 3: Account status (an open lockout window means BLOCKED)
        if self._lockout.release_if_expired(user, now):
            await self._persist(user)
            self._logger.info("account_lockout_expired", user_id=str(user.id))

        if user.status != UserStatus.ACTIVE:
            self._logger.info(
                "login_failed",
                user_id=str(user.id),
                reason="account_not_active",
                status=user.status.value,
            )
            remaining = (
                self._lockout.remaining(user, now)
                if user.status == UserStatus.BLOCKED
                else None
            )
            return (
                Failure(error=AuthenticationError.for_status(user.status, remaining)),
                user.id,
            )

        # Step 4: Password
        if not self._password_service.verify_password(cmd.password, user.password_hash):
            locked = self._lockout.register_failure(user, now)
            await self._persist(user)
            if locked:
                self._logger.warning(
                    "account_locked",
                    user_id=str(user.id),
                    failed_attempts=user.access_failed_count,
                    lockout_end=user.lockout_end.isoformat()
                    if user.lockout_end
                    else None,
                )
            else:
                self._logger.info(
                    "login_failed",
                    user_id=str(user.id),
                    reason="invalid_password",
                    failed_attempts=user.access_failed_count,
                )
            return Failure(error=AuthenticationError.invalid_credentials()), user.id

        # Step 5: Reset failures
        user.record_successful_login(now)
        await self._persist(user)

        # Step 6: Email confirmation
        if not user.email_confirmed:
            return (
                Failure(
                    error=AuthenticationError(
                        code=ErrorCode.EMAIL_NOT_VERIFIED,
                        message=AuthenticationError.EMAIL_NOT_CONFIRMED,
                        account_status=user.status,
                    )
                ),
                user.id,
            )

        # Step 7: Second factor
        if user.two_factor_enabled:
            self._logger.info("login_two_factor_required", user_id=str(user.id))
            return Success(value=TwoFactorChallenge(user_id=user.id)), user.id

        # Step 8: Session
        tokens = await self._token_service.start_session(
            user, context=context, extended=context.remember_me
        )
        self._logger.info(
            "login_succeeded",
            user_id=str(user.id),
            session_id=str(tokens.session_id),
        )
        return (
            Success(
                value=AuthSucceeded(
                    user_id=user.id,
                    username=user.username,
                    email=user.email,
                    tokens=tokens,
                )
            ),
            user.id,
        )

    async def _persist(self, user: User) -> None:
        async with asyncio.timeout(self._store_timeout):
            await self._user_repo.update(user)

    async def _record_outcome(
        self,
        cmd: AuthenticateUser,
        result: LoginOutcome,
        user_id: UUID | None,
    ) -> None:
        """Single audit call-site for every expected outcome."""
        match result:
            case Success(value=TwoFactorChallenge()):
                action, succeeded, reason = (
                    AuditAction.USER_LOGIN_TWO_FACTOR_PENDING,
                    True,
                    ErrorCode.TWO_FACTOR_REQUIRED.value,
                )
            case Success():
                action, succeeded, reason = AuditAction.USER_LOGIN_SUCCESS, True, None
            case Failure(error=error):
                action, succeeded, reason = (
                    AuditAction.USER_LOGIN_FAILED,
                    False,
                    error.code.value,
                )

        await self._audit.attempt(
            action=action,
            identifier=cmd.identifier,
            succeeded=succeeded,
            user_id=user_id,
            reason=reason,
            ip_address=cmd.context.ip_address,
            user_agent=cmd.context.user_agent,
        )
