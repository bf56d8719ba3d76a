"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention where practical.
They form the closed set of failure reasons surfaced by the authentication
core; callers switch on the code, never on the message text.

Categories:
- Validation errors (VALIDATION_*, PASSWORD_*)
- Resource errors (*_NOT_FOUND)
- Authentication errors (INVALID_CREDENTIALS, TOKEN_*, RECAPTCHA_FAILED)
- Account state errors (ACCOUNT_*, EMAIL_*)
- Second factor errors (TWO_FACTOR_*, INVALID_TWO_FACTOR_CODE)
- Side channel errors (AUDIT_*, NOTIFICATION_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    PASSWORD_POLICY_VIOLATION = "password_policy_violation"
    PASSWORD_HISTORY_VIOLATION = "password_history_violation"
    PASSWORD_MISMATCH = "password_mismatch"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"

    # Authentication errors
    RECAPTCHA_FAILED = "recaptcha_failed"
    INVALID_CREDENTIALS = "invalid_credentials"
    TOKEN_INVALID = "token_invalid_or_expired"
    AUTHENTICATION_FAILED = "authentication_failed"

    # Account state errors
    ACCOUNT_LOCKED = "account_locked"
    ACCOUNT_NOT_ACTIVE = "account_not_active"
    EMAIL_NOT_ACTIVATED = "email_not_activated"
    ACCOUNT_SUSPENDED = "account_suspended"
    ACCOUNT_DELETED = "account_deleted"
    EMAIL_NOT_VERIFIED = "email_not_confirmed"

    # Second factor errors
    TWO_FACTOR_REQUIRED = "two_factor_required"
    INVALID_TWO_FACTOR_CODE = "invalid_two_factor_code"
    TWO_FACTOR_NOT_ENABLED = "two_factor_not_enabled"
    TWO_FACTOR_ALREADY_ENABLED = "two_factor_already_enabled"

    # Side channels
    AUDIT_RECORD_FAILED = "audit_record_failed"
    NOTIFICATION_FAILED = "notification_failed"
