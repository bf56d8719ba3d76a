"""User repository protocol.

Port for user persistence. Infrastructure provides the SQLAlchemy adapter.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities import User


class UserRepository(Protocol):
    """User repository protocol (port).

    Implementations persist the full User aggregate, including its security
    state. Every write commits before returning, so a recorded failed attempt
    is never half persisted.

    Example:
        >>> class SQLUserRepository:
        ...     async def find_by_identifier(self, identifier: str) -> User | None:
        ...         ...
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_identifier(self, identifier: str) -> User | None:
        """Find user by username or email (case-insensitive).

        Args:
            identifier: Username or email address.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def save(self, user: User) -> None:
        """Insert a new user."""
        ...

    async def update(self, user: User) -> None:
        """Persist changes to an existing user.

        Raises:
            NoResultFound: If the user does not exist.
        """
        ...
