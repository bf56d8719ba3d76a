"""RolePermissionLookup - read-only SQL adapter.

Resolves the role names and permission codes embedded in access tokens.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.persistence.models.role import (
    Permission,
    Role,
    role_permissions,
    user_roles,
)


class SQLRolePermissionLookup:
    """SQLAlchemy implementation of RolePermissionLookup protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_role_names(self, user_id: UUID) -> list[str]:
        stmt = (
            select(Role.name)
            .join(user_roles, user_roles.c.role_id == Role.id)
            .where(user_roles.c.user_id == user_id)
            .order_by(Role.name)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_permission_codes(self, user_id: UUID) -> list[str]:
        stmt = (
            select(Permission.code)
            .join(role_permissions, role_permissions.c.permission_id == Permission.id)
            .join(user_roles, user_roles.c.role_id == role_permissions.c.role_id)
            .where(user_roles.c.user_id == user_id)
            .distinct()
            .order_by(Permission.code)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
