"""Password strength rules.

Pure rule evaluation against the thresholds in SecurityPolicy. Returns every
violated rule so the caller can show them all at once.

Usage:
    from src.domain.policies import PasswordPolicy

    violations = PasswordPolicy(settings.security_policy()).violations("weak")
    # ["Password must be at least 8 characters", ...]
"""

from src.domain.value_objects import SecurityPolicy


class PasswordPolicy:
    """Configurable password strength rules.

    Rules (each toggled by SecurityPolicy):
        - Length between min and max (inclusive)
        - At least one digit
        - At least one lowercase letter
        - At least one uppercase letter
        - At least one non-alphanumeric character

    Example:
        >>> policy = PasswordPolicy(SecurityPolicy())
        >>> policy.violations("SecurePass123!")
        []
        >>> policy.is_satisfied_by("short")
        False
    """

    def __init__(self, policy: SecurityPolicy) -> None:
        self._policy = policy

    def violations(self, password: str) -> list[str]:
        """Return the violated rules, in rule order (empty when valid)."""
        policy = self._policy
        errors: list[str] = []

        if len(password) < policy.password_min_length:
            errors.append(
                f"Password must be at least {policy.password_min_length} characters"
            )
        if len(password) > policy.password_max_length:
            errors.append(
                f"Password must be at most {policy.password_max_length} characters"
            )
        if policy.require_digit and not any(c.isdigit() for c in password):
            errors.append("Password must contain a digit")
        if policy.require_lowercase and not any(c.islower() for c in password):
            errors.append("Password must contain a lowercase letter")
        if policy.require_uppercase and not any(c.isupper() for c in password):
            errors.append("Password must contain an uppercase letter")
        if policy.require_non_alphanumeric and all(c.isalnum() for c in password):
            errors.append("Password must contain a non-alphanumeric character")

        return errors

    def is_satisfied_by(self, password: str) -> bool:
        return not self.violations(password)
