"""PasswordHistoryRepository - SQLAlchemy implementation.

Append-only history capped per user: every append evicts entries beyond the
newest ``limit`` in the same transaction.
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.password_history import PasswordHistoryEntry
from src.infrastructure.persistence.models.password_history import (
    PasswordHistory as PasswordHistoryModel,
)


class PasswordHistoryRepository:
    """SQLAlchemy implementation of PasswordHistoryRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_recent(
        self,
        user_id: UUID,
        limit: int,
    ) -> list[PasswordHistoryEntry]:
        """Return up to ``limit`` entries for the user, newest first."""
        if limit <= 0:
            return []
        stmt = (
            select(PasswordHistoryModel)
            .where(PasswordHistoryModel.user_id == user_id)
            .order_by(
                PasswordHistoryModel.changed_at.desc(),
                PasswordHistoryModel.id.desc(),
            )
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def append(self, entry: PasswordHistoryEntry, limit: int) -> None:
        """Store an entry and evict the oldest beyond ``limit``.

        Args:
            entry: New history entry.
            limit: Entries to keep for the user.
        """
        self._session.add(
            PasswordHistoryModel(
                id=entry.id,
                user_id=entry.user_id,
                password_hash=entry.password_hash,
                changed_at=entry.changed_at,
                ip_address=entry.ip_address,
                user_agent=entry.user_agent,
            )
        )
        await self._session.flush()

        overflow = (
            select(PasswordHistoryModel.id)
            .where(PasswordHistoryModel.user_id == entry.user_id)
            .order_by(
                PasswordHistoryModel.changed_at.desc(),
                PasswordHistoryModel.id.desc(),
            )
            .offset(max(limit, 0))
        )
        stale_ids = list((await self._session.execute(overflow)).scalars().all())
        if stale_ids:
            await self._session.execute(
                delete(PasswordHistoryModel)
                .where(PasswordHistoryModel.id.in_(stale_ids))
                .execution_options(synchronize_session=False)
            )
        await self._session.commit()

    def _to_domain(self, model: PasswordHistoryModel) -> PasswordHistoryEntry:
        return PasswordHistoryEntry(
            id=model.id,
            user_id=model.user_id,
            password_hash=model.password_hash,
            changed_at=model.changed_at,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
        )
