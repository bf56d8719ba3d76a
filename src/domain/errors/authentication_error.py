"""Authentication domain errors.

Defines the error type returned by login, refresh, logout and second-factor
operations.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions (return Failure(error) instead)

Usage:
    from src.domain.errors import AuthenticationError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=AuthenticationError(
        code=ErrorCode.ACCOUNT_LOCKED,
        message=AuthenticationError.ACCOUNT_LOCKED,
        lockout_remaining=user.lockout_remaining(now),
        account_status=user.status,
    ))
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import ClassVar

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.domain.enums import UserStatus


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure.

    Unknown identifiers and wrong passwords share INVALID_CREDENTIALS so
    callers cannot enumerate accounts. Account-state failures stay
    distinguishable and carry the status.

    Attributes:
        lockout_remaining: Time until a temporary lockout ends.
        account_status: Account status behind a status-specific failure.
    """

    lockout_remaining: timedelta | None = None
    account_status: UserStatus | None = None

    # User-facing messages
    RECAPTCHA_FAILED: ClassVar[str] = "CAPTCHA verification failed"
    INVALID_CREDENTIALS: ClassVar[str] = "Invalid username/email or password"
    ACCOUNT_LOCKED: ClassVar[str] = "Account is locked"
    EMAIL_NOT_ACTIVATED: ClassVar[str] = "Account has not been activated"
    ACCOUNT_SUSPENDED: ClassVar[str] = "Account is suspended"
    ACCOUNT_DELETED: ClassVar[str] = "Account has been deleted"
    EMAIL_NOT_CONFIRMED: ClassVar[str] = "Email address has not been confirmed"
    INVALID_TWO_FACTOR_CODE: ClassVar[str] = "Invalid verification code"
    TWO_FACTOR_NOT_ENABLED: ClassVar[str] = "Two-factor authentication is not enabled"
    TWO_FACTOR_ALREADY_ENABLED: ClassVar[str] = (
        "Two-factor authentication is already enabled"
    )
    TOKEN_INVALID: ClassVar[str] = "Token is invalid or expired"
    UNEXPECTED: ClassVar[str] = "Authentication failed"

    @classmethod
    def invalid_credentials(cls) -> "AuthenticationError":
        return cls(
            code=ErrorCode.INVALID_CREDENTIALS,
            message=cls.INVALID_CREDENTIALS,
        )

    @classmethod
    def token_invalid(cls) -> "AuthenticationError":
        return cls(code=ErrorCode.TOKEN_INVALID, message=cls.TOKEN_INVALID)

    @classmethod
    def unexpected(cls) -> "AuthenticationError":
        """Generic failure that hides internal detail from the caller."""
        return cls(code=ErrorCode.AUTHENTICATION_FAILED, message=cls.UNEXPECTED)

    @classmethod
    def for_status(
        cls,
        status: UserStatus,
        lockout_remaining: timedelta | None = None,
    ) -> "AuthenticationError":
        """Status-specific failure for an account that is not ACTIVE.

        Args:
            status: Current account status.
            lockout_remaining: Time left on a temporary lockout (BLOCKED only).

        Returns:
            AuthenticationError carrying the status.
        """
        code, message = _STATUS_FAILURES.get(
            status,
            (ErrorCode.ACCOUNT_NOT_ACTIVE, cls.UNEXPECTED),
        )
        return cls(
            code=code,
            message=message,
            lockout_remaining=lockout_remaining,
            account_status=status,
        )


_STATUS_FAILURES: dict[UserStatus, tuple[ErrorCode, str]] = {
    UserStatus.REGISTERED: (
        ErrorCode.EMAIL_NOT_ACTIVATED,
        AuthenticationError.EMAIL_NOT_ACTIVATED,
    ),
    UserStatus.BLOCKED: (ErrorCode.ACCOUNT_LOCKED, AuthenticationError.ACCOUNT_LOCKED),
    UserStatus.SUSPENDED: (
        ErrorCode.ACCOUNT_SUSPENDED,
        AuthenticationError.ACCOUNT_SUSPENDED,
    ),
    UserStatus.DELETED: (ErrorCode.ACCOUNT_DELETED, AuthenticationError.ACCOUNT_DELETED),
}
