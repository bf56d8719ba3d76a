"""JWT token service (adapter).

This service implements the TokenGenerationProtocol using PyJWT.

Architecture:
    - Implements TokenGenerationProtocol (no inheritance required)
    - Structural typing via Protocol
    - Injected via dependency container

Security:
    - HMAC-SHA256 (HS256) by default
    - 256-bit secret key minimum
    - Issuer and audience pinned on decode
    - exp, iat, sub and jti claims required

Revocation:
    This service only proves a token was signed by us and has not expired.
    SessionTokenService checks the ``jti`` against the session store.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from src.core.result import Failure, Result, Success

_REQUIRED_CLAIMS = ["exp", "iat", "sub", "jti"]


class JWTService:
    """JWT token generation and validation service.

    Usage:
        from src.core.container import get_jwt_service

        jwt_service = get_jwt_service()
        token = jwt_service.generate_access_token(
            user_id=user.id,
            session_id=jti,
            email=user.email,
            username=user.username,
            roles=["user"],
            permissions=[],
            issued_at=now,
            expires_at=now + timedelta(hours=2),
        )
        result = jwt_service.validate_access_token(token)
    """

    def __init__(
        self,
        secret_key: str,
        *,
        issuer: str,
        audience: str,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC signing.
                MUST be at least 256 bits (32 bytes) for security.
            issuer: Value of the ``iss`` claim.
            audience: Value of the ``aud`` claim.
            algorithm: JWS algorithm (default: HS256).

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._audience = audience
        self._algorithm = algorithm

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
        """Generate a signed access token.

        Args:
            user_id: User's unique identifier (``sub`` claim).
            session_id: Session identifier (``jti`` claim).
            email: User's email address.
            username: User's login name.
            roles: Role names held at issuance.
            permissions: Permission codes held at issuance.
            issued_at: Issuance time (``iat`` claim).
            expires_at: Expiry time (``exp`` claim).

        Returns:
            JWT access token string (header.payload.signature).
        """
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "jti": str(session_id),
            "email": email,
            "username": username,
            "roles": roles,
            "permissions": permissions,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "iss": self._issuer,
            "aud": self._audience,
        }
        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Validate an access token and extract its claims.

        Args:
            token: JWT access token string to validate.

        Returns:
            Success(claims) if valid. Failure("expired") for an expired token,
            Failure("invalid") for anything else (bad signature, wrong issuer
            or audience, missing claims, malformed input).
        """
        if not token:
            return Failure(error="invalid")
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": _REQUIRED_CLAIMS},
            )
        except ExpiredSignatureError:
            return Failure(error="expired")
        except InvalidTokenError:
            return Failure(error="invalid")
        return Success(value=payload)
