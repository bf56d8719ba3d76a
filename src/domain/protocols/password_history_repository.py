"""Password history repository protocol."""

from typing import Protocol
from uuid import UUID

from src.domain.entities import PasswordHistoryEntry


class PasswordHistoryRepository(Protocol):
    """Append-only password history, capped per user.

    Implementations keep at most ``limit`` entries per user and evict the
    oldest on overflow.
    """

    async def find_recent(
        self,
        user_id: UUID,
        limit: int,
    ) -> list[PasswordHistoryEntry]:
        """Return up to ``limit`` entries, newest first."""
        ...

    async def append(self, entry: PasswordHistoryEntry, limit: int) -> None:
        """Store an entry and evict anything beyond the newest ``limit``."""
        ...
