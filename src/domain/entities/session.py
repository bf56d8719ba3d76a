"""Session domain entity.

Pure business logic, no framework dependencies.

A session binds an issued token pair to a user, a device and a validity
window. The session id doubles as the ``jti`` claim of the access token, so a
token is only valid while its session row is active.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class Session:
    """Session domain entity.

    Business Rules:
        - Session is active if not revoked and not expired
        - Created only by a successful authentication (password, second
          factor, or refresh)
        - Revocation is immediate and permanent; the first revocation wins
        - Never mutated otherwise

    Attributes:
        id: Session identifier, equal to the access token ``jti``.
        user_id: User who owns this session.
        refresh_token_hash: Bcrypt hash of the refresh token (never the raw token).
        ip_address: Client IP at session creation.
        user_agent: Full user agent string.
        device_info: Parsed device info ("Chrome on Mac OS X").
        issued_at: When the token pair was issued.
        expires_at: When the session (and its access token) expires.
        is_extended: Remember-me session (longer lifetime, kept on refresh).
        revoked_at: When session was revoked.
        revoked_reason: Why session was revoked.

    Example:
        >>> session = Session(
        ...     id=uuid7(),
        ...     user_id=user.id,
        ...     refresh_token_hash="9f2c...",
        ...     expires_at=datetime.now(UTC) + timedelta(hours=2),
        ... )
        >>> session.is_active()
        True
        >>> session.revoke("user_logout")
        True
        >>> session.is_active()
        False
    """

    id: UUID
    user_id: UUID
    refresh_token_hash: str
    expires_at: datetime
    issued_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    ip_address: str | None = None
    user_agent: str | None = None
    device_info: str | None = None
    is_extended: bool = False
    revoked_at: datetime | None = None
    revoked_reason: str | None = None

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_active(self, now: datetime | None = None) -> bool:
        """Check if session is active (not revoked, not expired).

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            True if session is active, False otherwise.
        """
        if self.revoked_at is not None:
            return False
        return self.expires_at > (now or datetime.now(UTC))

    def revoke(self, reason: str, now: datetime | None = None) -> bool:
        """Revoke this session.

        Args:
            reason: Why session is being revoked. Common reasons:
                - "user_logout": User initiated logout
                - "logout_all": User logged out everywhere
                - "refreshed": Replaced by a refreshed session
                - "password_changed": Password change forces re-auth
                - "two_factor_disabled": Second factor removed

        Returns:
            bool: True if this call revoked the session, False if it was
            already revoked (the original timestamp and reason are kept).
        """
        if self.revoked_at is not None:
            return False
        self.revoked_at = now or datetime.now(UTC)
        self.revoked_reason = reason
        return True
