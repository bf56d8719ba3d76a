"""Token generation protocol for domain layer.

This protocol defines the interface for signing and verifying session
(access) tokens. Infrastructure layer provides the JWT implementation.

Token Strategy:
    - Access tokens: signed JWT bound to a session through the ``jti`` claim
    - Refresh tokens: independent opaque random strings (see
      RefreshTokenServiceProtocol)
    - Signature and expiry are checked here; revocation is checked against
      the session store by the caller
"""

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from src.core.result import Result


class TokenGenerationProtocol(Protocol):
    """Access token signing and verification interface.

    Usage:
        token = jwt_service.generate_access_token(
            user_id=user.id,
            session_id=jti,
            email=user.email,
            username=user.username,
            roles=["admin"],
            permissions=["users.read"],
            issued_at=now,
            expires_at=now + timedelta(hours=2),
        )

        match jwt_service.validate_access_token(token):
            case Success(value=claims):
                jti = claims["jti"]
            case Failure(error=reason):
                ...
    """

    def generate_access_token(
        self,
        *,
        user_id: UUID,
        session_id: UUID,
        email: str,
        username: str,
        roles: list[str],
        permissions: list[str],
        issued_at: datetime,
        expires_at: datetime,
    ) -> str:
        """Sign an access token.

        Returns:
            Compact JWT string. Claims: sub, jti, email, username, roles,
            permissions, iat, exp, iss, aud.
        """
        ...

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Verify signature, expiry, issuer and audience.

        Returns:
            Success(claims) if the token verifies, Failure(reason) otherwise.
        """
        ...
