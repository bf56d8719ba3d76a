"""Refresh token service.

This service generates opaque refresh tokens and the hashes stored with each
session. The same hashing covers two-factor recovery codes.

Token Strategy:
    - Opaque tokens (NOT JWT), independent of the access token
    - 32-byte random string (urlsafe base64)
    - Hashed with bcrypt before storage; the raw token is returned to the
      client once
    - Sessions are looked up by jti, so the salted hash is only ever checked
      against one known record
"""

import secrets

import bcrypt


class RefreshTokenService:
    """Refresh token generation and verification service.

    Usage:
        service = RefreshTokenService(cost_factor=settings.bcrypt_rounds)

        token, token_hash = service.generate_token()
        # Store token_hash on the session, return token to the client

        service.verify_token(presented_token, session.refresh_token_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize refresh token service.

        Args:
            cost_factor: bcrypt cost (4-31). Tests use a low value for speed.

        Raises:
            ValueError: If cost_factor is outside bcrypt's range.
        """
        if not 4 <= cost_factor <= 31:
            raise ValueError("cost_factor must be between 4 and 31")
        self._cost_factor = cost_factor

    def generate_token(self) -> tuple[str, str]:
        """Generate refresh token and its hash.

        Returns:
            Tuple of (token, token_hash):
                - token: Plain token to return to user (urlsafe base64)
                - token_hash: Bcrypt hash to store
        """
        token = secrets.token_urlsafe(32)
        return token, self.hash_token(token)

    def hash_token(self, token: str) -> str:
        """Salted bcrypt hash of ``token``."""
        hashed = bcrypt.hashpw(
            token.encode("utf-8"), bcrypt.gensalt(rounds=self._cost_factor)
        )
        return hashed.decode("utf-8")

    def verify_token(self, token: str, token_hash: str) -> bool:
        """Verify token against stored hash.

        Returns:
            True if token matches, False otherwise (empty input or a
            malformed hash included).
        """
        if not token or not token_hash:
            return False
        try:
            # bcrypt.checkpw does constant-time comparison
            return bcrypt.checkpw(token.encode("utf-8"), token_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False
