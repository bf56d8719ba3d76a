"""List sessions query handler.

Retrieves sessions for a user, optionally filtering to active only.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.application.queries.session_queries import ListUserSessions
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.protocols import SessionRepository


@dataclass
class SessionListItem:
    """Individual session in list result."""

    id: UUID
    device_info: str | None
    ip_address: str | None
    issued_at: datetime
    expires_at: datetime
    is_extended: bool
    is_revoked: bool
    is_current: bool


@dataclass
class SessionListResult:
    """Session list query result."""

    sessions: list[SessionListItem]
    total_count: int
    active_count: int


class ListUserSessionsHandler:
    """Handler for listing user sessions.

    Fetches from the store on every call (no cache).
    """

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    async def handle(
        self, query: ListUserSessions
    ) -> Result[SessionListResult, DomainError]:
        """Handle list sessions query.

        Args:
            query: ListUserSessions query with user_id and filters.

        Returns:
            Success(SessionListResult) with list of sessions.
        """
        sessions = await self._session_repo.find_by_user_id(
            query.user_id,
            active_only=query.active_only,
        )

        items = [
            SessionListItem(
                id=session.id,
                device_info=session.device_info,
                ip_address=session.ip_address,
                issued_at=session.issued_at,
                expires_at=session.expires_at,
                is_extended=session.is_extended,
                is_revoked=session.is_revoked,
                is_current=session.id == query.current_session_id,
            )
            for session in sessions
        ]

        return Success(
            value=SessionListResult(
                sessions=items,
                total_count=len(items),
                active_count=sum(1 for s in sessions if s.is_active()),
            )
        )
