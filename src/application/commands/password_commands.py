"""Password management commands."""

from dataclasses import dataclass, field
from uuid import UUID

from src.application.dtos.auth_dtos import LoginContext


@dataclass(frozen=True, kw_only=True)
class ChangePassword:
    """User-initiated password change.

    Attributes:
        user_id: User changing the password.
        current_password: Current password, re-verified.
        new_password: Requested password.
        confirm_password: Must equal new_password.
        current_session_id: Session kept alive after the change. None revokes
            every session.
        context: Client metadata recorded in the password history.

    Example:
        >>> command = ChangePassword(
        ...     user_id=user.id,
        ...     current_password="OldPass123!",
        ...     new_password="NewPass456!",
        ...     confirm_password="NewPass456!",
        ... )
        >>> result = await handler.handle(command)
    """

    user_id: UUID
    current_password: str = field(repr=False)
    new_password: str = field(repr=False)
    confirm_password: str = field(repr=False)
    current_session_id: UUID | None = None
    context: LoginContext = field(default_factory=LoginContext)


@dataclass(frozen=True, kw_only=True)
class ResetUserPassword:
    """Administrative password reset.

    The user must change the password at the next login and every session
    is revoked.
    """

    user_id: UUID
    new_password: str = field(repr=False)
    context: LoginContext = field(default_factory=LoginContext)
