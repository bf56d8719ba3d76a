"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Database (SQLAlchemy async engine)
- Password hashing (bcrypt)
- Token signing (JWT) and refresh-token hashing (bcrypt)
- TOTP engine (pyotp)
- Audit sink, notification sender, CAPTCHA verifier
- Device enrichment (user agent parsing)
- Logging (structlog console/JSON)

Adapter selection lives here (composition root); the application layer only
sees protocols.
"""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols import (
        AuditProtocol,
        CaptchaVerifierProtocol,
        DeviceEnricher,
        LoggerProtocol,
        NotificationProtocol,
        PasswordHashingProtocol,
        RefreshTokenServiceProtocol,
        TokenGenerationProtocol,
        TotpProtocol,
    )
    from src.domain.value_objects import SecurityPolicy


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager instance.

    Note:
        Prefer get_db_session() for per-unit-of-work sessions.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_security_policy() -> "SecurityPolicy":
    """Get the immutable security policy built from settings."""
    return settings.security_policy()


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    JSON output when LOG_JSON is set (testing/CI/production), colored console
    output otherwise.

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=settings.log_json or settings.is_production,
        level="DEBUG" if settings.debug else settings.log_level,
    ).bind(app=settings.app_name, env=settings.environment.value)


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Returns BcryptPasswordService with the configured cost factor.
    """
    from src.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_jwt_service() -> "TokenGenerationProtocol":
    """Get JWT signing service singleton (app-scoped)."""
    from src.infrastructure.security import JWTService

    assert settings.secret_key is not None  # set by Settings validation
    return JWTService(
        settings.secret_key,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        algorithm=settings.jwt_algorithm,
    )


@lru_cache()
def get_refresh_token_service() -> "RefreshTokenServiceProtocol":
    """Get refresh token (and recovery code) hashing service singleton."""
    from src.infrastructure.security import RefreshTokenService

    return RefreshTokenService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_totp_service() -> "TotpProtocol":
    """Get TOTP engine singleton (app-scoped)."""
    from src.infrastructure.security import TotpService

    return TotpService(issuer=settings.totp_issuer)


@lru_cache()
def get_audit() -> "AuditProtocol":
    """Get audit sink singleton (structured log lines)."""
    from src.infrastructure.audit import LoggingAuditAdapter

    return LoggingAuditAdapter()


@lru_cache()
def get_notification_service() -> "NotificationProtocol":
    """Get notification sender singleton.

    Codes are only echoed in logs during development.
    """
    from src.infrastructure.notification import StubNotificationService

    return StubNotificationService(expose_codes=settings.is_development)


@lru_cache()
def get_captcha_verifier() -> "CaptchaVerifierProtocol":
    """Get CAPTCHA verifier singleton.

    Returns:
        RecaptchaVerifier when RECAPTCHA_SECRET_KEY is set, otherwise
        AllowAllCaptchaVerifier (development/testing only).

    Raises:
        ValueError: If no secret is configured in production.
    """
    from src.infrastructure.captcha import AllowAllCaptchaVerifier, RecaptchaVerifier

    if settings.recaptcha_secret_key:
        return RecaptchaVerifier(
            secret_key=settings.recaptcha_secret_key,
            min_score=settings.recaptcha_min_score,
            verify_url=settings.recaptcha_verify_url,
        )
    if settings.is_production:
        raise ValueError("RECAPTCHA_SECRET_KEY must be set in production")
    return AllowAllCaptchaVerifier()


@lru_cache()
def get_device_enricher() -> "DeviceEnricher":
    """Get user agent parser singleton."""
    from src.infrastructure.enrichers import UserAgentDeviceEnricher

    return UserAgentDeviceEnricher()


# ============================================================================
# Unit-of-Work-Scoped Dependencies
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (unit-of-work scoped).

    Creates new session with automatic transaction management:
        - Commits on success
        - Rolls back on exception or cancellation
        - Always closes session

    Yields:
        Database session.

    Usage:
        async for session in get_db_session():
            handler = get_authenticate_user_handler(session)
            result = await handler.handle(command)
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
