"""Common error classes shared by every layer.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found

Authentication-specific failures live in ``src.domain.errors`` because they
carry domain state (account status, lockout window).

Usage:
    from src.core.errors import ValidationError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.PASSWORD_MISMATCH,
        message="New password and confirmation do not match",
        field="confirm_password",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (User, Session, ...).
        resource_id: ID of the resource that was not found.
    """

    resource_type: str
    resource_id: str
