"""Pytest configuration shared by unit and integration tests.

Provides:
1. Marker registration (unit, integration)
2. Domain entity factories with sensible defaults
3. Security adapters configured for fast tests (bcrypt cost 10)
4. A throwaway SQLite database per test for repository tests
"""

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock
from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

# Settings are built on import; keep tests away from any real .env secrets
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("BCRYPT_ROUNDS", "10")

from src.domain.entities.session import Session  # noqa: E402
from src.domain.entities.user import User  # noqa: E402
from src.domain.enums import UserStatus  # noqa: E402
from src.domain.value_objects import SecurityPolicy  # noqa: E402
from src.infrastructure.persistence.database import Database  # noqa: E402
from src.infrastructure.security import (  # noqa: E402
    BcryptPasswordService,
    JWTService,
    RefreshTokenService,
    TotpService,
)

TEST_SECRET_KEY = "test-secret-key-that-is-at-least-32-characters"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (mocked collaborators)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (real SQLite database)"
    )


# =============================================================================
# Entity factories
# =============================================================================


def create_user(
    user_id: UUID | None = None,
    username: str = "alice",
    email: str = "alice@example.com",
    password_hash: str = "hashed_password",
    status: UserStatus = UserStatus.ACTIVE,
    access_failed_count: int = 0,
    lockout_end: datetime | None = None,
    email_confirmed: bool = True,
    two_factor_enabled: bool = False,
    lockout_enabled: bool = True,
    phone_number: str | None = None,
) -> User:
    """Helper to create a User entity for testing.

    Defaults describe an active, confirmed account without a second factor.
    """
    return User(
        id=user_id or uuid7(),
        username=username,
        email=email,
        password_hash=password_hash,
        status=status,
        access_failed_count=access_failed_count,
        lockout_end=lockout_end,
        email_confirmed=email_confirmed,
        two_factor_enabled=two_factor_enabled,
        lockout_enabled=lockout_enabled,
        phone_number=phone_number,
    )


def create_session(
    user_id: UUID,
    session_id: UUID | None = None,
    refresh_token_hash: str = "stored-hash",
    issued_at: datetime | None = None,
    expires_in: timedelta = timedelta(hours=2),
    revoked_at: datetime | None = None,
    is_extended: bool = False,
) -> Session:
    """Helper to create a Session entity for testing."""
    issued_at = issued_at or datetime.now(UTC)
    return Session(
        id=session_id or uuid7(),
        user_id=user_id,
        refresh_token_hash=refresh_token_hash,
        issued_at=issued_at,
        expires_at=issued_at + expires_in,
        revoked_at=revoked_at,
        revoked_reason="test" if revoked_at else None,
        is_extended=is_extended,
    )


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def security_policy() -> SecurityPolicy:
    return SecurityPolicy()


@pytest.fixture(scope="session")
def password_service() -> BcryptPasswordService:
    """Real bcrypt at the lowest allowed cost factor."""
    return BcryptPasswordService(cost_factor=10)


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(TEST_SECRET_KEY, issuer="AuthCore", audience="AuthCoreApi")


@pytest.fixture
def refresh_token_service() -> RefreshTokenService:
    return RefreshTokenService(cost_factor=4)


@pytest.fixture
def totp_service() -> TotpService:
    return TotpService(issuer="AuthCore")


@pytest.fixture
def mock_logger() -> Mock:
    """Logger double that accepts any structured call."""
    return Mock()


@pytest.fixture
def mock_audit_trail() -> AsyncMock:
    return AsyncMock()


# =============================================================================
# Database fixtures
# =============================================================================


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """Fresh SQLite database (file-backed, all tables created) per test."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'authcore_test.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.get_session() as session:
        yield session
