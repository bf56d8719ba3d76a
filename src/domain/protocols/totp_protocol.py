"""TOTP protocol for the second factor.

Defines the time-based one-time password engine used by the two-factor
handlers. Implementations are pure and stateless (safe to share).

Algorithm (RFC 6238 over RFC 4226):
    - counter = floor(unix_seconds / 30)
    - HMAC-SHA1 over the 8-byte big-endian counter
    - Dynamic truncation to 31 bits, modulo 10^6, zero-padded to 6 digits
    - Validation accepts counter-1, counter and counter+1
"""

from datetime import datetime
from typing import Protocol


class TotpProtocol(Protocol):
    """Time-based one-time password engine."""

    def generate_secret_key(self) -> str:
        """Generate a new shared secret (20 random bytes, base32)."""
        ...

    def current_counter(self, at: datetime | None = None) -> int:
        """Time-step counter for ``at`` (defaults to now)."""
        ...

    def generate_code(self, secret_key: str, counter: int) -> str:
        """Six-digit code for an explicit counter value."""
        ...

    def current_code(self, secret_key: str) -> str:
        """Six-digit code for the current time step."""
        ...

    def validate_code(
        self,
        secret_key: str,
        code: str,
        at: datetime | None = None,
    ) -> bool:
        """Check a code against the previous, current and next time step.

        Returns:
            bool: True on a match. False for a mismatch or malformed input.
        """
        ...

    def generate_recovery_codes(self, count: int = 8) -> list[str]:
        """Generate single-use recovery codes (10 random bytes, hex each)."""
        ...

    def provisioning_uri(self, secret_key: str, account_name: str) -> str:
        """``otpauth://`` URI for enrolling an authenticator app."""
        ...
