"""Session queries (CQRS read operations).

Queries represent requests for session information. They are immutable
dataclasses with question-like names. Queries NEVER change state.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ListUserSessions:
    """List sessions for a user.

    Attributes:
        user_id: User identifier.
        active_only: If True, only return active (non-revoked, non-expired) sessions.
        current_session_id: Current session ID (to mark it in response).

    Example:
        >>> query = ListUserSessions(
        ...     user_id=UUID("123e4567..."),
        ...     current_session_id=UUID("abc123..."),
        ... )
        >>> result = await handler.handle(query)
    """

    user_id: UUID
    active_only: bool = True
    current_session_id: UUID | None = None
