"""Account lockout policy.

State machine over a user's ``(status, access_failed_count, lockout_end)``.
Thresholds come from SecurityPolicy. Every transition delegates to the User
entity, which keeps the lockout invariant.

Transitions:
    register_failure: count += 1, lock at the threshold
    lock:             status BLOCKED, lockout_end = now + duration
    unlock:           status ACTIVE, lockout_end None, count 0
    reset:            count 0
    release_if_expired: unlock once a temporary lockout has run out

Usage:
    from src.domain.policies import AccountLockoutPolicy

    lockout = AccountLockoutPolicy(settings.security_policy())
    if lockout.register_failure(user):
        logger.warning("account_locked", user_id=str(user.id))
"""

from datetime import UTC, datetime, timedelta

from src.domain.entities import User
from src.domain.value_objects import SecurityPolicy


class AccountLockoutPolicy:
    """Failed-attempt lockout rules for the User aggregate.

    Attributes:
        threshold: Consecutive failures that lock the account.
        lockout_duration: Length of a failed-attempt lockout.
    """

    def __init__(self, policy: SecurityPolicy) -> None:
        self.threshold = policy.max_failed_access_attempts
        self.lockout_duration = policy.lockout_duration

    def register_failure(self, user: User, now: datetime | None = None) -> bool:
        """Count one failed attempt.

        Returns:
            bool: True if this failure locked the account.
        """
        return user.register_failed_attempt(
            self.threshold,
            self.lockout_duration,
            now or datetime.now(UTC),
        )

    def lock(
        self,
        user: User,
        now: datetime | None = None,
        duration: timedelta | None = None,
    ) -> None:
        """Lock the account for ``duration`` (policy default when omitted)."""
        user.lock(duration or self.lockout_duration, now or datetime.now(UTC))

    def block(self, user: User, now: datetime | None = None) -> None:
        """Block the account until an administrator unlocks it."""
        user.lock(None, now or datetime.now(UTC))

    def unlock(self, user: User, now: datetime | None = None) -> None:
        user.unlock(now or datetime.now(UTC))

    def reset(self, user: User, now: datetime | None = None) -> None:
        user.reset_failed_attempts(now or datetime.now(UTC))

    def is_locked(self, user: User, now: datetime | None = None) -> bool:
        return user.is_locked(now or datetime.now(UTC))

    def remaining(self, user: User, now: datetime | None = None) -> timedelta | None:
        return user.lockout_remaining(now or datetime.now(UTC))

    def release_if_expired(self, user: User, now: datetime | None = None) -> bool:
        """Unlock a temporarily locked account whose window has closed.

        Administrative blocks (no ``lockout_end``) are never released here.

        Returns:
            bool: True if the account was released.
        """
        now = now or datetime.now(UTC)
        if not user.lockout_expired(now):
            return False
        user.unlock(now)
        return True
