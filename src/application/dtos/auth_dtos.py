"""Authentication DTOs (Data Transfer Objects).

Request context and result dataclasses for authentication handlers.
These carry data between the presentation boundary and the handlers.

DTOs:
    - LoginContext: Client metadata for a login-like request
    - IssuedTokens: Access/refresh token pair bound to a new session
    - TokenClaims: Verified claims of a live access token
    - AuthSucceeded: Login (or second factor) completed
    - TwoFactorChallenge: Password verified, second factor still required
    - TwoFactorEnrollment: Secret and recovery codes shown once on enable
    - AuthResponse: Flat response shape shared by login, refresh and 2FA
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import TwoFactorMethod


@dataclass(frozen=True, kw_only=True)
class LoginContext:
    """Client metadata attached to a login-like request.

    Attributes:
        ip_address: Client IP address (for sessions and audit).
        user_agent: Client user agent (parsed into device info).
        remember_me: Request an extended session lifetime.
        captcha_proof: CAPTCHA response token, validated when present.
    """

    ip_address: str | None = None
    user_agent: str | None = None
    remember_me: bool = False
    captcha_proof: str | None = None


@dataclass(frozen=True, kw_only=True)
class IssuedTokens:
    """Token pair bound to one session.

    Attributes:
        access_token: Signed JWT (``jti`` equals ``session_id``).
        refresh_token: Opaque refresh token, returned to the client once.
        refresh_token_hash: Hash stored with the session (never returned
            to clients).
        session_id: Session identifier.
        user_id: Token subject.
        issued_at: Issue time.
        expires_at: Expiry of the access token and of the session.
        is_extended: Remember-me session.
        token_type: Always "bearer".
    """

    access_token: str
    refresh_token: str
    refresh_token_hash: str = field(repr=False)
    session_id: UUID
    user_id: UUID
    issued_at: datetime
    expires_at: datetime
    is_extended: bool = False
    token_type: str = "bearer"

    @property
    def expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return int((self.expires_at - self.issued_at).total_seconds())


@dataclass(frozen=True, kw_only=True)
class TokenClaims:
    """Claims of an access token whose session is still active."""

    user_id: UUID
    session_id: UUID
    email: str
    username: str
    roles: list[str]
    permissions: list[str]
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True, kw_only=True)
class AuthSucceeded:
    """Authentication completed and a session was started."""

    user_id: UUID
    username: str
    email: str
    tokens: IssuedTokens


@dataclass(frozen=True, kw_only=True)
class TwoFactorChallenge:
    """Password verified; the caller must complete the second factor.

    No token is issued and no session exists yet.
    """

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class TwoFactorEnrollment:
    """Result of enabling two-factor authentication.

    Plaintext recovery codes are returned here once and only hashes are
    stored.
    """

    method: TwoFactorMethod
    secret_key: str
    provisioning_uri: str
    recovery_codes: list[str]


@dataclass(frozen=True, kw_only=True)
class AuthResponse:
    """Flat outcome of login, refresh and second-factor verification.

    Attributes:
        succeeded: True only when tokens were issued.
        access_token: Issued access token, if any.
        refresh_token: Issued refresh token, if any.
        requires_two_factor: Password verified, second factor pending.
        user_id: Authenticated (or challenged) user.
        error: Failure, if any.

    Example:
        >>> result = await handler.handle(command)
        >>> response = AuthResponse.from_result(result)
        >>> response.requires_two_factor
        False
    """

    succeeded: bool
    access_token: str | None = None
    refresh_token: str | None = None
    requires_two_factor: bool = False
    user_id: UUID | None = None
    error: DomainError | None = None

    @classmethod
    def from_result(
        cls,
        result: Result[AuthSucceeded | TwoFactorChallenge | IssuedTokens, DomainError],
    ) -> "AuthResponse":
        """Flatten a handler result into the response shape."""
        match result:
            case Success(value=AuthSucceeded() as succeeded):
                return cls(
                    succeeded=True,
                    access_token=succeeded.tokens.access_token,
                    refresh_token=succeeded.tokens.refresh_token,
                    user_id=succeeded.user_id,
                )
            case Success(value=IssuedTokens() as tokens):
                return cls(
                    succeeded=True,
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                    user_id=tokens.user_id,
                )
            case Success(value=TwoFactorChallenge() as challenge):
                return cls(
                    succeeded=False,
                    requires_two_factor=True,
                    user_id=challenge.user_id,
                )
            case Failure(error=error):
                return cls(succeeded=False, error=error)
        raise TypeError(f"Unsupported result: {result!r}")
