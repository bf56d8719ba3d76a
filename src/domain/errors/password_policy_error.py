"""Password policy errors.

Returned when a candidate password breaks a strength rule or matches one of
the user's recent passwords.

Usage:
    from src.domain.errors import PasswordPolicyError

    match policy_service.validate(password):
        case Failure(error=PasswordPolicyError(violations=violations)):
            ...
"""

from dataclasses import dataclass

from src.core.errors import ValidationError


@dataclass(frozen=True, slots=True, kw_only=True)
class PasswordPolicyError(ValidationError):
    """Password rejected by the policy.

    Attributes:
        violations: Human-readable rule violations, in rule order. Empty for
            history violations.
    """

    violations: tuple[str, ...] = ()
