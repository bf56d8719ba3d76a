"""Security policy value object.

Immutable bundle of the thresholds that drive account lockout, password
rules, session lifetimes and recovery-code generation. Built from settings
via ``Settings.security_policy()`` and passed explicitly into the policy
objects, so tests can vary thresholds without touching configuration.
"""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True, kw_only=True)
class SecurityPolicy:
    """Security thresholds.

    Attributes:
        max_failed_access_attempts: Consecutive failures before lockout.
        lockout_duration: How long a failed-attempt lockout lasts.
        password_min_length: Minimum password length (inclusive).
        password_max_length: Maximum password length (inclusive).
        require_digit: Password must contain a digit.
        require_lowercase: Password must contain a lowercase letter.
        require_uppercase: Password must contain an uppercase letter.
        require_non_alphanumeric: Password must contain a symbol.
        password_history_limit: Previous hashes that cannot be reused.
        access_token_lifetime: Session lifetime for a normal login.
        extended_token_lifetime: Session lifetime for a remember-me login.
        recovery_code_count: Recovery codes generated when enabling 2FA.

    Raises:
        ValueError: If a threshold is out of range.

    Example:
        >>> policy = SecurityPolicy(max_failed_access_attempts=3)
        >>> policy.token_lifetime(extended=True)
        datetime.timedelta(days=7)
    """

    max_failed_access_attempts: int = 5
    lockout_duration: timedelta = timedelta(minutes=15)
    password_min_length: int = 8
    password_max_length: int = 128
    require_digit: bool = True
    require_lowercase: bool = True
    require_uppercase: bool = True
    require_non_alphanumeric: bool = True
    password_history_limit: int = 5
    access_token_lifetime: timedelta = timedelta(hours=2)
    extended_token_lifetime: timedelta = timedelta(days=7)
    recovery_code_count: int = 8

    def __post_init__(self) -> None:
        if self.max_failed_access_attempts < 1:
            raise ValueError("max_failed_access_attempts must be at least 1")
        if self.lockout_duration <= timedelta(0):
            raise ValueError("lockout_duration must be positive")
        if self.password_min_length < 1:
            raise ValueError("password_min_length must be at least 1")
        if self.password_max_length < self.password_min_length:
            raise ValueError("password_max_length must be >= password_min_length")
        if self.password_history_limit < 0:
            raise ValueError("password_history_limit cannot be negative")
        if self.access_token_lifetime <= timedelta(0):
            raise ValueError("access_token_lifetime must be positive")
        if self.extended_token_lifetime <= timedelta(0):
            raise ValueError("extended_token_lifetime must be positive")
        if self.recovery_code_count < 1:
            raise ValueError("recovery_code_count must be at least 1")

    def token_lifetime(self, *, extended: bool) -> timedelta:
        """Return the session lifetime for a normal or remember-me login."""
        return self.extended_token_lifetime if extended else self.access_token_lifetime
