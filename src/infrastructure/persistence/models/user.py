"""User database model for authentication.

This module defines the User model for storing user account information.

Security:
    - password_hash: NEVER stores plaintext passwords (bcrypt hashed)
    - status: Account lifecycle state (registered, active, suspended,
      blocked, deleted)
    - access_failed_count: Consecutive failed logins, for lockout
    - lockout_end: End of a temporary lockout (set only while blocked)
"""

from datetime import datetime

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, UTCDateTime


class User(BaseMutableModel):
    """User model for authentication and account management.

    Fields:
        id: UUID primary key (from BaseMutableModel)
        created_at: Timestamp when user registered (from BaseMutableModel)
        updated_at: Timestamp when user last updated (from BaseMutableModel)
        username: Unique login name
        email: Unique email address
        password_hash: Bcrypt hashed password (NEVER plaintext)
        status: UserStatus value
        access_failed_count: Consecutive failed logins (resets on success)
        lockout_enabled: Whether failed logins can lock this account
        lockout_end: When a temporary lockout ends (nullable)
        two_factor_enabled: Second factor required at login
        email_confirmed: Email confirmation status
        require_password_change: Forced password change at next login
        last_password_change_at: Last password change (nullable)
        last_login_at: Last successful password check (nullable)
        phone_number: SMS destination (nullable)

    Indexes:
        - ix_users_username: (username) for login queries
        - ix_users_email: (email) for login queries
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="Login name (unique, matched case-insensitively)",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (unique, matched case-insensitively)",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="registered",
        comment="registered, active, suspended, blocked, deleted",
    )

    access_failed_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Consecutive failed logins (resets on success or unlock)",
    )

    lockout_enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    lockout_end: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        default=None,
        comment="End of temporary lockout (only while blocked)",
    )

    two_factor_enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    email_confirmed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    require_password_change: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    last_password_change_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
    )

    last_login_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
    )

    phone_number: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )
