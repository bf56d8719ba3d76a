"""Data Transfer Objects for the application layer."""

from src.application.dtos.auth_dtos import (
    AuthResponse,
    AuthSucceeded,
    IssuedTokens,
    LoginContext,
    TokenClaims,
    TwoFactorChallenge,
    TwoFactorEnrollment,
)

__all__ = [
    "AuthResponse",
    "AuthSucceeded",
    "IssuedTokens",
    "LoginContext",
    "TokenClaims",
    "TwoFactorChallenge",
    "TwoFactorEnrollment",
]
