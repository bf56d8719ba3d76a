"""Session repository protocol for persistence abstraction.

This module defines the port (interface) for session persistence.
Infrastructure layer implements the adapter.

Consistency:
    Lookups always hit the store. A revoke is visible to the very next
    ``find_active_by_jti`` call; implementations MUST NOT cache results.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities import Session


class SessionRepository(Protocol):
    """Session repository protocol (port) for persistence.

    Example:
        >>> class SQLSessionRepository:
        ...     async def create(self, session: Session) -> None:
        ...         ...
        >>> # SQLSessionRepository implements SessionRepository
        >>> # via structural typing (no inheritance needed)
    """

    async def create(self, session: Session) -> None:
        """Persist a new session.

        Args:
            session: Session to store. ``session.id`` is the token jti.
        """
        ...

    async def find_by_id(self, session_id: UUID) -> Session | None:
        """Find session by ID (revoked or expired sessions included).

        Args:
            session_id: Session identifier.

        Returns:
            Session if found, None otherwise.
        """
        ...

    async def find_active_by_jti(
        self,
        jti: UUID,
        now: datetime | None = None,
    ) -> Session | None:
        """Find an active (not revoked, not expired) session by token jti.

        Args:
            jti: Token identifier (equals the session id).
            now: Reference time (defaults to current UTC time).

        Returns:
            Session if active, None if missing, revoked or expired.
        """
        ...

    async def find_by_user_id(
        self,
        user_id: UUID,
        *,
        active_only: bool = False,
    ) -> list[Session]:
        """Find all sessions for a user, newest first.

        Args:
            user_id: User identifier.
            active_only: If True, only return active (non-revoked, non-expired) sessions.

        Returns:
            List of sessions (may be empty).
        """
        ...

    async def revoke(self, session_id: UUID, reason: str) -> bool:
        """Revoke one session.

        Returns:
            True if the session was active and is now revoked, False if it
            was missing or already revoked.
        """
        ...

    async def revoke_all_for_user(
        self,
        user_id: UUID,
        reason: str,
        except_session_id: UUID | None = None,
    ) -> int:
        """Revoke every active session of a user.

        Args:
            user_id: User whose sessions are revoked.
            reason: Revocation reason stored on each session.
            except_session_id: Optional session to keep (current device).

        Returns:
            Number of sessions revoked.
        """
        ...

    async def cleanup_expired(self, before: datetime | None = None) -> int:
        """Delete sessions that expired before ``before`` (default now).

        Returns:
            Number of sessions deleted.
        """
        ...
