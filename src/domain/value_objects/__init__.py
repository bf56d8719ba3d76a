"""Domain value objects with validation.

Immutable value objects that enforce business constraints.
"""

from src.domain.value_objects.security_policy import SecurityPolicy

__all__ = [
    "SecurityPolicy",
]
