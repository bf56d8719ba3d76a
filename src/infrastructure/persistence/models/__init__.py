"""Database models for persistence layer.

This package contains SQLAlchemy database models that map to database
tables. These are infrastructure concerns and should not be imported by the
domain layer.

Models Organization:
    - user.py: User model
    - session.py: Session model (primary key = token jti)
    - two_factor_settings.py: Second-factor configuration
    - password_history.py: Previous password hashes (append-only)
    - role.py: Read-only role/permission tables

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    Database models live here in src/infrastructure/persistence/models/
    They are separate and mapped via repository layer.
"""

from src.infrastructure.persistence.models.password_history import PasswordHistory
from src.infrastructure.persistence.models.role import (
    Permission,
    Role,
    role_permissions,
    user_roles,
)
from src.infrastructure.persistence.models.session import Session
from src.infrastructure.persistence.models.two_factor_settings import (
    TwoFactorSettings,
)
from src.infrastructure.persistence.models.user import User

__all__ = [
    "PasswordHistory",
    "Permission",
    "Role",
    "Session",
    "TwoFactorSettings",
    "User",
    "role_permissions",
    "user_roles",
]
