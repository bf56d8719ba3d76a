"""Two-factor settings repository protocol."""

from typing import Protocol
from uuid import UUID

from src.domain.entities import TwoFactorSettings


class TwoFactorSettingsRepository(Protocol):
    """Persistence port for TwoFactorSettings (one row per user)."""

    async def find_by_user_id(self, user_id: UUID) -> TwoFactorSettings | None:
        """Return the user's settings, or None if 2FA was never enabled."""
        ...

    async def save(self, settings: TwoFactorSettings) -> None:
        """Insert or replace the user's settings."""
        ...

    async def delete(self, user_id: UUID) -> bool:
        """Remove the user's settings.

        Returns:
            True if a row was deleted.
        """
        ...
