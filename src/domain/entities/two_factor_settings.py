"""Two-factor settings domain entity.

One-to-one with User. Created when the second factor is enabled, deleted
when it is disabled.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.domain.enums import TwoFactorMethod


@dataclass(slots=True, kw_only=True)
class TwoFactorSettings:
    """Second-factor configuration for one user.

    Attributes:
        user_id: Owning user.
        secret_key: Base32 TOTP shared secret.
        method: How codes reach the user.
        recovery_codes: Hashes of unused recovery codes. Plaintext codes are
            shown to the user once and never stored.
        is_enabled: Whether the second factor is enforced.
        created_at: When the settings were created.
        updated_at: When the settings were last changed.
    """

    user_id: UUID
    secret_key: str
    method: TwoFactorMethod = TwoFactorMethod.AUTHENTICATOR
    recovery_codes: list[str] = field(default_factory=list)
    is_enabled: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def remaining_recovery_codes(self) -> int:
        return len(self.recovery_codes)

    def consume_recovery_code(
        self,
        code_hash: str,
        now: datetime | None = None,
    ) -> bool:
        """Remove a recovery code so it cannot be used again.

        Args:
            code_hash: Stored hash that matched the presented code.
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if the code was present and is now consumed.
        """
        if code_hash not in self.recovery_codes:
            return False
        self.recovery_codes.remove(code_hash)
        self.updated_at = now or datetime.now(UTC)
        return True
