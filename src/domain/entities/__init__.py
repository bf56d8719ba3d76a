"""Domain entities for business logic.

Pure business logic entities with no framework dependencies.
"""

from src.domain.entities.password_history import PasswordHistoryEntry
from src.domain.entities.session import Session
from src.domain.entities.two_factor_settings import TwoFactorSettings
from src.domain.entities.user import User

__all__ = [
    "PasswordHistoryEntry",
    "Session",
    "TwoFactorSettings",
    "User",
]
