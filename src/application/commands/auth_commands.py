"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Commands don't return values (handlers return Result types)
"""

from dataclasses import dataclass, field
from uuid import UUID

from src.application.dtos.auth_dtos import LoginContext


@dataclass(frozen=True, kw_only=True)
class AuthenticateUser:
    """Authenticate with username-or-email and password.

    Attributes:
        identifier: Username or email (case-insensitive).
        password: Plain text password (never logged).
        context: Client metadata (IP, user agent, remember-me, CAPTCHA).

    Example:
        >>> command = AuthenticateUser(
        ...     identifier="alice@example.com",
        ...     password="SecurePass123!",
        ...     context=LoginContext(ip_address="203.0.113.7", remember_me=True),
        ... )
        >>> result = await handler.handle(command)
        >>> # Success(AuthSucceeded | TwoFactorChallenge) or Failure(AuthenticationError)
    """

    identifier: str
    password: str = field(repr=False)
    context: LoginContext = field(default_factory=LoginContext)


@dataclass(frozen=True, kw_only=True)
class RefreshAccessToken:
    """Exchange a live token pair for a new one.

    The access token must still be valid; its session is revoked and a new
    session is started with the same remember-me setting.

    Attributes:
        access_token: Current access token.
        refresh_token: Refresh token issued with it.
        context: Client metadata for the new session.
    """

    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    context: LoginContext = field(default_factory=LoginContext)


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """Revoke one session (when a token is given) or every session.

    Attributes:
        user_id: User logging out.
        access_token: Token of the session to end. None ends all sessions.
        context: Client metadata for the audit trail.
    """

    user_id: UUID
    access_token: str | None = field(default=None, repr=False)
    context: LoginContext = field(default_factory=LoginContext)


@dataclass(frozen=True, kw_only=True)
class UnlockAccount:
    """Administrative unlock of a blocked account.

    Attributes:
        user_id: Account to unlock.
        performed_by: Administrator performing the unlock, if known.
    """

    user_id: UUID
    performed_by: UUID | None = None
