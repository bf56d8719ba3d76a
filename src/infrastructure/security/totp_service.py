"""TOTP service (adapter) built on pyotp.

Implements TotpProtocol: RFC 6238 time-based codes over RFC 4226 HOTP with
HMAC-SHA1, 30-second steps and 6 digits.

Clock Skew:
    Validation accepts the previous, current and next time step (plus or
    minus 30 seconds). Anything older than two steps is rejected.

Recovery Codes:
    10 random bytes each, hex-encoded. Callers store only hashes and remove
    a code once used.
"""

import secrets
from datetime import UTC, datetime

import pyotp

TOTP_INTERVAL = 30
TOTP_DIGITS = 6
TOTP_VALID_WINDOW = 1
RECOVERY_CODE_BYTES = 10


class TotpService:
    """Time-based one-time password engine.

    Stateless and safe to share between concurrent requests.

    Usage:
        totp = TotpService(issuer="AuthCore")
        secret = totp.generate_secret_key()
        uri = totp.provisioning_uri(secret, "alice@example.com")
        totp.validate_code(secret, "123456")
    """

    def __init__(self, issuer: str = "AuthCore") -> None:
        self._issuer = issuer

    def _totp(self, secret_key: str) -> pyotp.TOTP:
        return pyotp.TOTP(secret_key, digits=TOTP_DIGITS, interval=TOTP_INTERVAL)

    def generate_secret_key(self) -> str:
        """Generate a new shared secret (20 random bytes, base32 encoded)."""
        return pyotp.random_base32(length=32)

    def current_counter(self, at: datetime | None = None) -> int:
        """Return ``floor(unix_seconds / 30)`` for ``at`` (default now)."""
        at = at or datetime.now(UTC)
        return int(at.timestamp()) // TOTP_INTERVAL

    def generate_code(self, secret_key: str, counter: int) -> str:
        """Six-digit HOTP code for an explicit counter value."""
        return pyotp.HOTP(secret_key, digits=TOTP_DIGITS).at(counter)

    def current_code(self, secret_key: str) -> str:
        return self.generate_code(secret_key, self.current_counter())

    def validate_code(
        self,
        secret_key: str,
        code: str,
        at: datetime | None = None,
    ) -> bool:
        """Check a code against counter-1, counter and counter+1.

        Returns:
            bool: True on a match. False for a mismatch, a code that is not
            exactly six digits, or an undecodable secret.
        """
        if not code:
            return False
        code = code.strip()
        if len(code) != TOTP_DIGITS or not code.isdigit():
            return False
        try:
            return self._totp(secret_key).verify(
                code,
                for_time=at or datetime.now(UTC),
                valid_window=TOTP_VALID_WINDOW,
            )
        except ValueError:
            return False

    def generate_recovery_codes(self, count: int = 8) -> list[str]:
        """Generate ``count`` single-use recovery codes (20 hex chars each)."""
        return [secrets.token_hex(RECOVERY_CODE_BYTES) for _ in range(count)]

    def provisioning_uri(self, secret_key: str, account_name: str) -> str:
        """``otpauth://totp/...`` URI for authenticator app enrolment."""
        return self._totp(secret_key).provisioning_uri(
            name=account_name,
            issuer_name=self._issuer,
        )
