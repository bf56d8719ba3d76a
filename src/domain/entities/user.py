"""User domain entity for authentication.

Pure business logic, no framework dependencies.

Security State:
    - status: Account lifecycle state (see UserStatus)
    - access_failed_count: Consecutive failed password attempts
    - lockout_end: End of a temporary lockout (only while BLOCKED)

The transition methods on this entity are the only code path that changes
security state. Every transition keeps the lockout invariant intact:
``lockout_end`` is set only while ``status`` is BLOCKED.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

from src.domain.enums import UserStatus


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class User:
    """User domain entity with authentication business rules.

    Pure business logic with no infrastructure dependencies.

    Business Rules:
        - Email confirmation required before login
        - Account locks after N consecutive failed attempts (default 5)
        - Temporary lockout lasts a configured duration (default 15 minutes)
        - Failed attempt counter resets on successful authentication or unlock
        - DELETED is terminal: later transitions leave the account untouched

    Attributes:
        id: Unique user identifier
        username: Login name (case-insensitive match)
        email: Email address (case-insensitive match)
        password_hash: Bcrypt hashed password (never plaintext)
        status: Account lifecycle state
        access_failed_count: Consecutive failed password attempts
        lockout_enabled: Stored lockout preference (informational; the
            failure threshold locks every account)
        lockout_end: When a temporary lockout ends (None if not locked
            or if the block is administrative)
        two_factor_enabled: Whether a second factor is required at login
        email_confirmed: Email confirmation status
        require_password_change: User must change password at next login
        last_password_change_at: Timestamp of the last password change
        last_login_at: Timestamp of the last successful password check
        phone_number: Destination for SMS codes
        created_at: Timestamp when user was created
        updated_at: Timestamp when user was last updated

    Raises:
        ValueError: If constructed with ``lockout_end`` set while not BLOCKED,
            or with a negative failed-attempt counter.

    Example:
        >>> user = User(
        ...     id=uuid7(),
        ...     username="alice",
        ...     email="alice@example.com",
        ...     password_hash="$2b$12$...",
        ...     status=UserStatus.ACTIVE,
        ...     email_confirmed=True,
        ... )
        >>> user.register_failed_attempt(5, timedelta(minutes=15))
        False
        >>> user.access_failed_count
        1
    """

    id: UUID
    username: str
    email: str
    password_hash: str
    status: UserStatus = UserStatus.REGISTERED
    access_failed_count: int = 0
    lockout_enabled: bool = True
    lockout_end: datetime | None = None
    two_factor_enabled: bool = False
    email_confirmed: bool = False
    require_password_change: bool = False
    last_password_change_at: datetime | None = None
    last_login_at: datetime | None = None
    phone_number: str | None = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Reject states that violate the lockout invariant.

        Raises:
            ValueError: If the entity is constructed in an invalid state.
        """
        if self.lockout_end is not None and self.status != UserStatus.BLOCKED:
            raise ValueError(
                f"lockout_end can only be set while BLOCKED (status={self.status.value})"
            )
        if self.access_failed_count < 0:
            raise ValueError("access_failed_count cannot be negative")

    # =========================================================================
    # Queries
    # =========================================================================

    def is_locked(self, now: datetime | None = None) -> bool:
        """Check if the account is currently locked.

        A BLOCKED account is locked while its lockout window is open. A BLOCKED
        account without ``lockout_end`` is administratively blocked and stays
        locked until explicitly unlocked.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if login must be refused because of a lock.
        """
        if self.status != UserStatus.BLOCKED:
            return False
        if self.lockout_end is None:
            return True
        return self.lockout_end > (now or _utc_now())

    def lockout_remaining(self, now: datetime | None = None) -> timedelta | None:
        """Time left on a temporary lockout, or None if there is none."""
        if self.lockout_end is None:
            return None
        remaining = self.lockout_end - (now or _utc_now())
        return remaining if remaining > timedelta(0) else None

    def lockout_expired(self, now: datetime | None = None) -> bool:
        """True if a temporary lockout has run out but was not yet released."""
        return (
            self.status == UserStatus.BLOCKED
            and self.lockout_end is not None
            and self.lockout_end <= (now or _utc_now())
        )

    def matches_identifier(self, identifier: str) -> bool:
        """Check a username-or-email identifier (case-insensitive)."""
        candidate = identifier.strip().casefold()
        return candidate in (self.username.casefold(), self.email.casefold())

    # =========================================================================
    # Lockout transitions
    # =========================================================================

    def register_failed_attempt(
        self,
        threshold: int,
        lockout_duration: timedelta,
        now: datetime | None = None,
    ) -> bool:
        """Record a failed password attempt and lock at the threshold.

        Args:
            threshold: Consecutive failures that trigger a lockout.
            lockout_duration: How long the lockout lasts.
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if this attempt locked the account.

        Side Effects:
            - Increments access_failed_count by 1
            - Locks the account when the counter reaches the threshold,
              whatever the lockout_enabled flag says
        """
        if self.status == UserStatus.DELETED:
            return False
        now = now or _utc_now()
        self.access_failed_count += 1
        self.updated_at = now
        if self.access_failed_count >= threshold:
            self.lock(lockout_duration, now)
            return True
        return False

    def lock(self, duration: timedelta | None, now: datetime | None = None) -> None:
        """Block the account.

        Args:
            duration: Lockout length. None blocks until explicitly unlocked.
            now: Reference time (defaults to current UTC time).
        """
        if self.status == UserStatus.DELETED:
            return
        now = now or _utc_now()
        self.status = UserStatus.BLOCKED
        self.lockout_end = now + duration if duration is not None else None
        self.updated_at = now

    def unlock(self, now: datetime | None = None) -> None:
        """Lift a lock: status ACTIVE, no lockout window, counter at zero."""
        if self.status == UserStatus.DELETED:
            return
        self.status = UserStatus.ACTIVE
        self.lockout_end = None
        self.access_failed_count = 0
        self.updated_at = now or _utc_now()

    def reset_failed_attempts(self, now: datetime | None = None) -> None:
        """Reset the consecutive failure counter."""
        self.access_failed_count = 0
        self.updated_at = now or _utc_now()

    def record_successful_login(self, now: datetime | None = None) -> None:
        """Reset the failure counter and stamp the login time.

        Called as soon as the password is verified, before email and
        second-factor checks.
        """
        now = now or _utc_now()
        self.access_failed_count = 0
        self.last_login_at = now
        self.updated_at = now

    # =========================================================================
    # Lifecycle transitions
    # =========================================================================

    def confirm_email(self, now: datetime | None = None) -> None:
        """Mark the email as confirmed (REGISTERED becomes ACTIVE)."""
        if self.status == UserStatus.DELETED:
            return
        self.email_confirmed = True
        if self.status == UserStatus.REGISTERED:
            self.status = UserStatus.ACTIVE
        self.updated_at = now or _utc_now()

    def suspend(self, now: datetime | None = None) -> None:
        if self.status == UserStatus.DELETED:
            return
        self.status = UserStatus.SUSPENDED
        self.lockout_end = None
        self.updated_at = now or _utc_now()

    def reactivate(self, now: datetime | None = None) -> None:
        """Bring a SUSPENDED account back to ACTIVE."""
        if self.status != UserStatus.SUSPENDED:
            return
        self.status = UserStatus.ACTIVE
        self.updated_at = now or _utc_now()

    def delete(self, now: datetime | None = None) -> None:
        """Soft-delete the account (terminal)."""
        self.status = UserStatus.DELETED
        self.lockout_end = None
        self.updated_at = now or _utc_now()

    # =========================================================================
    # Credential transitions
    # =========================================================================

    def enable_two_factor(self, now: datetime | None = None) -> None:
        self.two_factor_enabled = True
        self.updated_at = now or _utc_now()

    def disable_two_factor(self, now: datetime | None = None) -> None:
        self.two_factor_enabled = False
        self.updated_at = now or _utc_now()

    def change_password(self, new_hash: str, now: datetime | None = None) -> None:
        """Replace the password hash after a user-initiated change.

        Side Effects:
            - Stores the new hash
            - Stamps last_password_change_at
            - Clears require_password_change
        """
        now = now or _utc_now()
        self.password_hash = new_hash
        self.last_password_change_at = now
        self.require_password_change = False
        self.updated_at = now

    def reset_password(self, new_hash: str, now: datetime | None = None) -> None:
        """Replace the password hash after an administrative reset.

        The user must choose a new password at the next login.
        """
        now = now or _utc_now()
        self.password_hash = new_hash
        self.last_password_change_at = now
        self.require_password_change = True
        self.updated_at = now
