"""Domain errors package.

Usage:
    from src.domain.errors import AuthenticationError, PasswordPolicyError
"""

from src.domain.errors.authentication_error import AuthenticationError
from src.domain.errors.password_policy_error import PasswordPolicyError

__all__ = [
    "AuthenticationError",
    "PasswordPolicyError",
]
