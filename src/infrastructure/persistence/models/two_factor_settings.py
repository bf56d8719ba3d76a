"""Two-factor settings database model (one row per user)."""

from uuid import UUID

from sqlalchemy import JSON, Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class TwoFactorSettings(BaseMutableModel):
    """Second-factor configuration.

    Fields:
        user_id: Owning user (unique, cascade delete)
        secret_key: Base32 TOTP shared secret
        method: authenticator, email or sms
        recovery_codes: JSON list of bcrypt-hashed recovery codes
        is_enabled: Whether the second factor is enforced
    """

    __tablename__ = "two_factor_settings"

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    secret_key: Mapped[str] = mapped_column(String(64), nullable=False)

    method: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="authenticator",
    )

    recovery_codes: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
