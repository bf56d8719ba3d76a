"""Domain enums for business logic.

All domain enums live in src/domain/enums/ for discoverability.

Available Enums:
    - UserStatus: User account lifecycle states
    - TwoFactorMethod: Second-factor delivery methods
    - AuditAction: Audit trail action types
"""

from src.domain.enums.audit_action import AuditAction
from src.domain.enums.two_factor_method import TwoFactorMethod
from src.domain.enums.user_status import UserStatus

__all__ = [
    "AuditAction",
    "TwoFactorMethod",
    "UserStatus",
]
