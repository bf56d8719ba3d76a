"""Audit action types for security event tracking.

Actions are recorded through the audit sink. Persistence of the audit trail
lives outside this service; only the action vocabulary is defined here.

Categories:
    - Authentication: USER_LOGIN_* and USER_LOGOUT* actions
    - Sessions: SESSION_* actions
    - Credentials: PASSWORD_* actions
    - Second factor: TWO_FACTOR_* actions
    - Administrative: ACCOUNT_* actions

Usage:
    from src.domain.enums import AuditAction

    await audit.log_action(
        action=AuditAction.PASSWORD_CHANGED,
        user_id=user.id,
        context={"sessions_revoked": 3},
    )
"""

from enum import Enum


class AuditAction(str, Enum):
    """Audit action types.

    String Enum:
        Inherits from str for easy serialization.
        Values are snake_case strings for consistency.
    """

    # Authentication
    USER_LOGIN_SUCCESS = "user_login_success"
    USER_LOGIN_FAILED = "user_login_failed"
    USER_LOGIN_TWO_FACTOR_PENDING = "user_login_two_factor_pending"
    USER_LOGOUT = "user_logout"
    USER_LOGOUT_ALL = "user_logout_all"

    # Sessions
    SESSION_REFRESHED = "session_refreshed"
    SESSION_REFRESH_FAILED = "session_refresh_failed"

    # Credentials
    PASSWORD_CHANGED = "password_changed"
    PASSWORD_RESET = "password_reset"

    # Second factor
    TWO_FACTOR_ENABLED = "two_factor_enabled"
    TWO_FACTOR_DISABLED = "two_factor_disabled"
    TWO_FACTOR_VERIFIED = "two_factor_verified"
    TWO_FACTOR_FAILED = "two_factor_failed"
    TWO_FACTOR_RECOVERY_CODE_USED = "two_factor_recovery_code_used"

    # Administrative
    ACCOUNT_LOCKED = "account_locked"
    ACCOUNT_UNLOCKED = "account_unlocked"

    # Failures surfaced at handler boundaries
    UNEXPECTED_ERROR = "unexpected_error"
