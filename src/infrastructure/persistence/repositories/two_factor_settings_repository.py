"""TwoFactorSettingsRepository - SQLAlchemy implementation.

One row per user; ``save`` inserts or replaces it.
"""

from typing import Any, cast
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.two_factor_settings import TwoFactorSettings
from src.domain.enums import TwoFactorMethod
from src.infrastructure.persistence.models.two_factor_settings import (
    TwoFactorSettings as TwoFactorSettingsModel,
)


class TwoFactorSettingsRepository:
    """SQLAlchemy implementation of TwoFactorSettingsRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_user_id(self, user_id: UUID) -> TwoFactorSettings | None:
        model = await self._find_model(user_id)
        if model is None:
            return None
        return self._to_domain(model)

    async def save(self, settings: TwoFactorSettings) -> None:
        """Insert or replace the user's settings.

        Args:
            settings: Settings to persist (recovery codes hashed).
        """
        model = await self._find_model(settings.user_id)
        if model is None:
            self._session.add(
                TwoFactorSettingsModel(
                    user_id=settings.user_id,
                    secret_key=settings.secret_key,
                    method=settings.method.value,
                    recovery_codes=list(settings.recovery_codes),
                    is_enabled=settings.is_enabled,
                    created_at=settings.created_at,
                    updated_at=settings.updated_at,
                )
            )
        else:
            model.secret_key = settings.secret_key
            model.method = settings.method.value
            # New list so the JSON column is flagged as changed
            model.recovery_codes = list(settings.recovery_codes)
            model.is_enabled = settings.is_enabled
            model.updated_at = settings.updated_at
        await self._session.commit()

    async def delete(self, user_id: UUID) -> bool:
        stmt = (
            delete(TwoFactorSettingsModel)
            .where(TwoFactorSettingsModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return (cast(Any, result).rowcount or 0) > 0

    async def _find_model(self, user_id: UUID) -> TwoFactorSettingsModel | None:
        stmt = (
            select(TwoFactorSettingsModel)
            .where(TwoFactorSettingsModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_domain(self, model: TwoFactorSettingsModel) -> TwoFactorSettings:
        return TwoFactorSettings(
            user_id=model.user_id,
            secret_key=model.secret_key,
            method=TwoFactorMethod(model.method),
            recovery_codes=list(model.recovery_codes),
            is_enabled=model.is_enabled,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
