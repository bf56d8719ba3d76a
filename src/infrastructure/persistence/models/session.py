"""Session database model.

One row per issued token pair. The primary key equals the access token's
``jti`` claim, so token validation is a primary-key lookup.

Security:
    - The raw access token is never stored
    - refresh_token_hash holds a bcrypt hash, never the raw token
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, UTCDateTime


class Session(BaseModel):
    """Session model.

    Fields:
        id: Session id / token jti (from BaseModel)
        created_at: Row creation time (from BaseModel)
        user_id: Owning user (cascade delete)
        refresh_token_hash: Bcrypt hash of the refresh token
        ip_address: Client IP at creation (IPv4 or IPv6 text)
        user_agent: Full user agent string
        device_info: Parsed device description
        issued_at: When the token pair was issued
        expires_at: When the session expires
        is_extended: Remember-me session
        revoked_at: When revoked (nullable)
        revoked_reason: Why revoked (nullable)

    Indexes:
        - ix_sessions_user_active: (user_id, revoked_at) for revoke-all and
          active-session listing
        - ix_sessions_expires_at: (expires_at) for cleanup
    """

    __tablename__ = "sessions"

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    refresh_token_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hash of the refresh token",
    )

    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)

    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)

    device_info: Mapped[str | None] = mapped_column(String(255), nullable=True)

    issued_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        index=True,
    )

    is_extended: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    revoked_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    revoked_reason: Mapped[str | None] = mapped_column(String(50), nullable=True)

    __table_args__ = (Index("ix_sessions_user_active", "user_id", "revoked_at"),)
