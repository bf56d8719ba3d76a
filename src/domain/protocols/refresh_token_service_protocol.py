"""Refresh token service protocol.

Refresh tokens are opaque random strings, not derived from the access token.
Only a salted hash is persisted with the session; the raw token is returned
to the client once. Recovery codes use the same hashing.
"""

from typing import Protocol


class RefreshTokenServiceProtocol(Protocol):
    """Refresh token generation and verification."""

    def generate_token(self) -> tuple[str, str]:
        """Generate a refresh token.

        Returns:
            Tuple of (token, token_hash). Store only the hash.
        """
        ...

    def hash_token(self, token: str) -> str:
        """Salted one-way hash of a token (differs on every call)."""
        ...

    def verify_token(self, token: str, token_hash: str) -> bool:
        """Constant-time check of a presented token against a stored hash."""
        ...
