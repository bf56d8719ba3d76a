"""Role and permission lookup protocol.

Role/permission management lives elsewhere. Token issuance only reads the
names a user currently holds so they can be embedded as claims.
"""

from typing import Protocol
from uuid import UUID


class RolePermissionLookup(Protocol):
    """Read-only access to a user's roles and permission codes."""

    async def get_role_names(self, user_id: UUID) -> list[str]:
        """Role names assigned to the user, sorted."""
        ...

    async def get_permission_codes(self, user_id: UUID) -> list[str]:
        """Distinct permission codes granted through the user's roles, sorted."""
        ...
