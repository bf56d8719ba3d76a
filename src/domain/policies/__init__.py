"""Domain policies.

Stateless rule objects configured from SecurityPolicy.
"""

from src.domain.policies.account_lockout import AccountLockoutPolicy
from src.domain.policies.password_policy import PasswordPolicy

__all__ = [
    "AccountLockoutPolicy",
    "PasswordPolicy",
]
