"""Password history entry.

Append-only record of a previous password hash, used to block reuse.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class PasswordHistoryEntry:
    """A password hash the user held at some point.

    Attributes:
        id: Entry identifier.
        user_id: Owning user.
        password_hash: Bcrypt hash of the password.
        changed_at: When the password was set.
        ip_address: Client IP of the change, if known.
        user_agent: Client user agent of the change, if known.
    """

    id: UUID
    user_id: UUID
    password_hash: str
    changed_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    ip_address: str | None = None
    user_agent: str | None = None
