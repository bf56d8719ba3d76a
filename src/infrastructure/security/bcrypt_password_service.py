"""Bcrypt password hashing service (adapter).

This service implements the PasswordHashingProtocol using bcrypt.

Architecture:
    - Implements PasswordHashingProtocol (no inheritance required)
    - Structural typing via Protocol
    - Injected via dependency container

Security:
    - Bcrypt with configurable cost factor (10-20, default 12)
    - Salted: the same password produces a different hash each time
    - Constant-time verification
    - Timing equalization: ``verify_dummy`` spends one full verification on
      a throwaway hash so unknown identifiers cost as much as wrong passwords
"""

import bcrypt

_DUMMY_PASSWORD = b"authcore-timing-equalization"


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from src.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("SecurePass123!")
        password_service.verify_password("SecurePass123!", password_hash)  # True
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (default: 12). Each +1 doubles
                computation time; 12 is about 250ms.

        Raises:
            ValueError: If cost factor is outside 10-20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor
        self._dummy_hash: bytes | None = None

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (bcrypt format: $2b$<cost>$...), 60 chars.
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns:
            True if password matches hash. False for a mismatch, a non-bcrypt
            hash, or a password bcrypt cannot process.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            return False

    def verify_dummy(self, password: str) -> bool:
        """Run one verification against a throwaway hash.

        Used when the identifier does not resolve to a user, so the response
        time matches a wrong-password attempt.

        Returns:
            Always False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                _DUMMY_PASSWORD, bcrypt.gensalt(rounds=self._cost_factor)
            )
        try:
            bcrypt.checkpw(password.encode("utf-8"), self._dummy_hash)
        except ValueError:
            pass
        return False
