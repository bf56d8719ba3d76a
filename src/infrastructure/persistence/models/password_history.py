"""Password history database model (append-only)."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, UTCDateTime


class PasswordHistory(BaseModel):
    """Previous password hash of a user.

    The repository keeps only the newest N rows per user.
    """

    __tablename__ = "password_history"

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    changed_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)

    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_password_history_user_changed", "user_id", "changed_at"),
    )
