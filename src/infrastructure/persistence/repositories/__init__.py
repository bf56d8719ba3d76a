"""Repository implementations (SQLAlchemy adapters)."""

from src.infrastructure.persistence.repositories.password_history_repository import (
    PasswordHistoryRepository,
)
from src.infrastructure.persistence.repositories.role_permission_lookup import (
    SQLRolePermissionLookup,
)
from src.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)
from src.infrastructure.persistence.repositories.two_factor_settings_repository import (
    TwoFactorSettingsRepository,
)
from src.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "PasswordHistoryRepository",
    "SQLRolePermissionLookup",
    "SessionRepository",
    "TwoFactorSettingsRepository",
    "UserRepository",
]
