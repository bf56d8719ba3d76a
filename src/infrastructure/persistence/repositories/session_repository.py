"""SessionRepository - SQLAlchemy implementation of SessionRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Session entities and database Session models.

This repository handles all session persistence operations including:
- Creation and lookup (by id / jti)
- Single and bulk revocation (logout, logout-everywhere, password change)
- Session cleanup (expired session removal)

Consistency:
    Reads use ``populate_existing`` and revocations are single UPDATE
    statements committed immediately, so a revoke is visible to the next
    validation even through a long-lived AsyncSession.
"""

from datetime import UTC, datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.session import Session
from src.infrastructure.persistence.models.session import Session as SessionModel


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    This class does NOT inherit from SessionRepository protocol
    (Protocol uses structural typing - duck typing with type safety).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as db_session:
        ...     repo = SessionRepository(db_session)
        ...     session = await repo.find_active_by_jti(jti)
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, session: Session) -> None:
        """Persist a new session.

        Args:
            session: Session entity (id = token jti).
        """
        self._session.add(self._to_model(session))
        await self._session.commit()

    async def find_by_id(self, session_id: UUID) -> Session | None:
        """Find session by ID, whatever its state."""
        stmt = (
            select(SessionModel)
            .where(SessionModel.id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        session_model = result.scalar_one_or_none()

        if session_model is None:
            return None

        return self._to_domain(session_model)

    async def find_active_by_jti(
        self,
        jti: UUID,
        now: datetime | None = None,
    ) -> Session | None:
        """Find an active session by token jti.

        Args:
            jti: Token identifier (equals the session id).
            now: Reference time (defaults to current UTC time).

        Returns:
            Session if not revoked and not expired, None otherwise.
        """
        now = now or datetime.now(UTC)
        stmt = (
            select(SessionModel)
            .where(
                SessionModel.id == jti,
                SessionModel.revoked_at.is_(None),
                SessionModel.expires_at > now,
            )
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        session_model = result.scalar_one_or_none()

        if session_model is None:
            return None

        return self._to_domain(session_model)

    async def find_by_user_id(
        self,
        user_id: UUID,
        *,
        active_only: bool = False,
    ) -> list[Session]:
        """Find all sessions for a user.

        Args:
            user_id: User identifier.
            active_only: If True, only return active (non-revoked, non-expired) sessions.

        Returns:
            List of sessions, newest first.
        """
        stmt = select(SessionModel).where(SessionModel.user_id == user_id)

        if active_only:
            stmt = stmt.where(
                SessionModel.revoked_at.is_(None),
                SessionModel.expires_at > datetime.now(UTC),
            )

        stmt = stmt.order_by(SessionModel.issued_at.desc()).execution_options(
            populate_existing=True
        )

        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def revoke(self, session_id: UUID, reason: str) -> bool:
        """Revoke one session.

        Already-revoked sessions keep their original timestamp and reason.

        Returns:
            True if this call revoked the session.
        """
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.id == session_id,
                SessionModel.revoked_at.is_(None),
            )
            .values(revoked_at=datetime.now(UTC), revoked_reason=reason)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return (cast(Any, result).rowcount or 0) > 0

    async def revoke_all_for_user(
        self,
        user_id: UUID,
        reason: str,
        except_session_id: UUID | None = None,
    ) -> int:
        """Revoke all active sessions for a user.

        Used on logout-everywhere, password change and 2FA disable.
        Optionally excludes the current session.

        Returns:
            Number of sessions revoked.
        """
        now = datetime.now(UTC)

        conditions = [
            SessionModel.user_id == user_id,
            SessionModel.revoked_at.is_(None),
            SessionModel.expires_at > now,
        ]
        if except_session_id is not None:
            conditions.append(SessionModel.id != except_session_id)

        stmt = (
            update(SessionModel)
            .where(*conditions)
            .values(revoked_at=now, revoked_reason=reason)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return cast(Any, result).rowcount or 0

    async def cleanup_expired(self, before: datetime | None = None) -> int:
        """Delete sessions that expired before ``before`` (default now).

        Returns:
            Number of sessions deleted.
        """
        if before is None:
            before = datetime.now(UTC)

        stmt = (
            delete(SessionModel)
            .where(SessionModel.expires_at < before)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return cast(Any, result).rowcount or 0

    def _to_domain(self, model: SessionModel) -> Session:
        return Session(
            id=model.id,
            user_id=model.user_id,
            refresh_token_hash=model.refresh_token_hash,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            device_info=model.device_info,
            issued_at=model.issued_at,
            expires_at=model.expires_at,
            is_extended=model.is_extended,
            revoked_at=model.revoked_at,
            revoked_reason=model.revoked_reason,
        )

    def _to_model(self, session: Session) -> SessionModel:
        return SessionModel(
            id=session.id,
            user_id=session.user_id,
            refresh_token_hash=session.refresh_token_hash,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            device_info=session.device_info,
            issued_at=session.issued_at,
            expires_at=session.expires_at,
            is_extended=session.is_extended,
            revoked_at=session.revoked_at,
            revoked_reason=session.revoked_reason,
        )
