"""Security infrastructure adapters.

This package contains security-related infrastructure implementations:
- Password hashing (bcrypt)
- JWT access token signing/verification
- Refresh token generation/verification (opaque tokens, bcrypt hashes)
- TOTP second factor (pyotp)
"""

from src.infrastructure.security.bcrypt_password_service import BcryptPasswordService
from src.infrastructure.security.jwt_service import JWTService
from src.infrastructure.security.refresh_token_service import RefreshTokenService
from src.infrastructure.security.totp_service import TotpService

__all__ = [
    "BcryptPasswordService",
    "JWTService",
    "RefreshTokenService",
    "TotpService",
]
