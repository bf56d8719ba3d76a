"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Adapter for hexagonal architecture.
Maps between domain User entities and database UserModel.
"""

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.user import User
from src.domain.enums import UserStatus
from src.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    This class does NOT inherit from UserRepository protocol (Protocol uses
    structural typing). Every write commits before returning.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_identifier("Alice@Example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        return self._to_domain(user_model)

    async def find_by_identifier(self, identifier: str) -> User | None:
        """Find user by username or email address.

        Comparison is case-insensitive and exact (no LIKE wildcards).

        Args:
            identifier: Username or email.

        Returns:
            Domain User entity if found, None otherwise.
        """
        candidate = identifier.strip().lower()
        if not candidate:
            return None

        stmt = (
            select(UserModel)
            .where(
                or_(
                    func.lower(UserModel.username) == candidate,
                    func.lower(UserModel.email) == candidate,
                )
            )
            .order_by(UserModel.created_at)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        return self._to_domain(user_model)

    async def save(self, user: User) -> None:
        """Create new user in database.

        Args:
            user: Domain User entity to persist.

        Raises:
            IntegrityError: If username or email already exists.
        """
        user_model = self._to_model(user)
        self.session.add(user_model)
        await self.session.commit()

    async def update(self, user: User) -> None:
        """Update existing user in database.

        Args:
            user: Domain User entity with updated fields.

        Raises:
            NoResultFound: If user doesn't exist.
        """
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one()

        user_model.username = user.username
        user_model.email = user.email
        user_model.password_hash = user.password_hash
        user_model.status = user.status.value
        user_model.access_failed_count = user.access_failed_count
        user_model.lockout_enabled = user.lockout_enabled
        user_model.lockout_end = user.lockout_end
        user_model.two_factor_enabled = user.two_factor_enabled
        user_model.email_confirmed = user.email_confirmed
        user_model.require_password_change = user.require_password_change
        user_model.last_password_change_at = user.last_password_change_at
        user_model.last_login_at = user.last_login_at
        user_model.phone_number = user.phone_number
        user_model.updated_at = user.updated_at

        await self.session.commit()

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=user_model.id,
            username=user_model.username,
            email=user_model.email,
            password_hash=user_model.password_hash,
            status=UserStatus(user_model.status),
            access_failed_count=user_model.access_failed_count,
            lockout_enabled=user_model.lockout_enabled,
            lockout_end=user_model.lockout_end,
            two_factor_enabled=user_model.two_factor_enabled,
            email_confirmed=user_model.email_confirmed,
            require_password_change=user_model.require_password_change,
            last_password_change_at=user_model.last_password_change_at,
            last_login_at=user_model.last_login_at,
            phone_number=user_model.phone_number,
            created_at=user_model.created_at,
            updated_at=user_model.updated_at,
        )

    def _to_model(self, user: User) -> UserModel:
        """Convert domain entity to database model."""
        return UserModel(
            id=user.id,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            status=user.status.value,
            access_failed_count=user.access_failed_count,
            lockout_enabled=user.lockout_enabled,
            lockout_end=user.lockout_end,
            two_factor_enabled=user.two_factor_enabled,
            email_confirmed=user.email_confirmed,
            require_password_change=user.require_password_change,
            last_password_change_at=user.last_password_change_at,
            last_login_at=user.last_login_at,
            phone_number=user.phone_number,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
