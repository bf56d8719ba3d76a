"""Integration tests for the SQLAlchemy repositories.

Tests cover:
- UserRepository: save/find, case-insensitive identifier lookup, update of
  lockout state
- SessionRepository: create/find, active filtering, revoke (first wins),
  revoke_all with exclusion, cleanup of expired sessions
- TwoFactorSettingsRepository: upsert and delete
- PasswordHistoryRepository: newest-first reads, eviction beyond the limit
- SQLRolePermissionLookup: role names and distinct permission codes

Architecture:
- Integration tests with a REAL SQLite database (aiosqlite)
- Fresh database file per test (see ``database`` fixture)
"""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import insert
from uuid_extensions import uuid7

from src.domain.entities.password_history import PasswordHistoryEntry
from src.domain.entities.two_factor_settings import TwoFactorSettings
from src.domain.enums import TwoFactorMethod, UserStatus
from src.infrastructure.persistence.models import (
    Permission,
    Role,
    role_permissions,
    user_roles,
)
from src.infrastructure.persistence.repositories import (
    PasswordHistoryRepository,
    SessionRepository,
    SQLRolePermissionLookup,
    TwoFactorSettingsRepository,
    UserRepository,
)
from tests.conftest import create_session, create_user


@pytest.mark.integration
class TestUserRepository:
    """Test user persistence."""

    async def test_save_and_find_by_id(self, db_session):
        # Arrange
        repo = UserRepository(db_session)
        user = create_user(phone_number="+15550100")

        # Act
        await repo.save(user)
        found = await repo.find_by_id(user.id)

        # Assert
        assert found is not None
        assert found.username == "alice"
        assert found.status == UserStatus.ACTIVE
        assert found.phone_number == "+15550100"
        assert found.created_at.tzinfo is not None

    @pytest.mark.parametrize("identifier", ["alice", "ALICE", "Alice@Example.COM", " alice "])
    async def test_find_by_identifier_case_insensitive(self, db_session, identifier):
        repo = UserRepository(db_session)
        user = create_user(username="Alice", email="alice@example.com")
        await repo.save(user)

        found = await repo.find_by_identifier(identifier)

        assert found is not None
        assert found.id == user.id

    async def test_find_by_identifier_unknown(self, db_session):
        repo = UserRepository(db_session)
        await repo.save(create_user())

        assert await repo.find_by_identifier("bob") is None

    async def test_update_persists_lockout_state(self, db_session):
        """Test lockout fields round-trip with a timezone-aware lockout_end."""
        # Arrange
        repo = UserRepository(db_session)
        user = create_user()
        await repo.save(user)
        now = datetime.now(UTC)
        for _ in range(5):
            user.register_failed_attempt(5, timedelta(minutes=15), now)

        # Act
        await repo.update(user)
        found = await repo.find_by_id(user.id)

        # Assert
        assert found.status == UserStatus.BLOCKED
        assert found.access_failed_count == 5
        assert found.lockout_end == user.lockout_end
        assert found.is_locked(now) is True


@pytest.mark.integration
class TestSessionRepository:
    """Test session persistence and revocation."""

    async def _user(self, db_session):
        user = create_user()
        await UserRepository(db_session).save(user)
        return user

    async def test_create_and_find_active(self, db_session):
        # Arrange
        user = await self._user(db_session)
        repo = SessionRepository(db_session)
        session = create_session(user.id, is_extended=True)

        # Act
        await repo.create(session)
        found = await repo.find_active_by_jti(session.id)

        # Assert
        assert found is not None
        assert found.user_id == user.id
        assert found.is_extended is True
        assert found.refresh_token_hash == "stored-hash"

    async def test_expired_session_not_active(self, db_session):
        user = await self._user(db_session)
        repo = SessionRepository(db_session)
        session = create_session(
            user.id, issued_at=datetime.now(UTC) - timedelta(hours=3)
        )
        await repo.create(session)

        assert await repo.find_active_by_jti(session.id) is None
        assert await repo.find_by_id(session.id) is not None

    async def test_revoke_first_wins(self, db_session):
        """Test a second revoke neither succeeds nor overwrites the reason."""
        # Arrange
        user = await self._user(db_session)
        repo = SessionRepository(db_session)
        session = create_session(user.id)
        await repo.create(session)

        # Act
        first = await repo.revoke(session.id, "logout")
        second = await repo.revoke(session.id, "password_changed")

        # Assert
        assert first is True
        assert second is False
        stored = await repo.find_by_id(session.id)
        assert stored.revoked_reason == "logout"
        assert await repo.find_active_by_jti(session.id) is None

    async def test_revoke_all_except_current(self, db_session):
        # Arrange
        user = await self._user(db_session)
        repo = SessionRepository(db_session)
        sessions = [create_session(user.id) for _ in range(3)]
        for session in sessions:
            await repo.create(session)

        # Act
        count = await repo.revoke_all_for_user(
            user.id, "password_changed", except_session_id=sessions[0].id
        )

        # Assert
        assert count == 2
        active = await repo.find_by_user_id(user.id, active_only=True)
        assert [s.id for s in active] == [sessions[0].id]
        assert len(await repo.find_by_user_id(user.id)) == 3

    async def test_revoke_all_skips_other_users(self, db_session):
        user = await self._user(db_session)
        other = create_user(username="bob", email="bob@example.com")
        await UserRepository(db_session).save(other)
        repo = SessionRepository(db_session)
        await repo.create(create_session(user.id))
        other_session = create_session(other.id)
        await repo.create(other_session)

        assert await repo.revoke_all_for_user(user.id, "logout_all") == 1
        assert await repo.find_active_by_jti(other_session.id) is not None

    async def test_find_by_user_id_newest_first(self, db_session):
        user = await self._user(db_session)
        repo = SessionRepository(db_session)
        now = datetime.now(UTC)
        older = create_session(user.id, issued_at=now - timedelta(minutes=5))
        newer = create_session(user.id, issued_at=now)
        await repo.create(older)
        await repo.create(newer)

        found = await repo.find_by_user_id(user.id)

        assert [s.id for s in found] == [newer.id, older.id]

    async def test_cleanup_expired(self, db_session):
        # Arrange
        user = await self._user(db_session)
        repo = SessionRepository(db_session)
        expired = create_session(user.id, issued_at=datetime.now(UTC) - timedelta(days=1))
        live = create_session(user.id)
        await repo.create(expired)
        await repo.create(live)

        # Act
        deleted = await repo.cleanup_expired()

        # Assert
        assert deleted == 1
        assert await repo.find_by_id(expired.id) is None
        assert await repo.find_by_id(live.id) is not None


@pytest.mark.integration
class TestTwoFactorSettingsRepository:
    """Test second-factor settings persistence."""

    async def test_save_find_update_delete(self, db_session):
        # Arrange
        user = create_user()
        await UserRepository(db_session).save(user)
        repo = TwoFactorSettingsRepository(db_session)
        settings = TwoFactorSettings(
            user_id=user.id,
            secret_key="JBSWY3DPEHPK3PXP",
            method=TwoFactorMethod.EMAIL,
            recovery_codes=["d1", "d2"],
        )

        # Act / Assert: insert
        await repo.save(settings)
        found = await repo.find_by_user_id(user.id)
        assert found.method == TwoFactorMethod.EMAIL
        assert found.recovery_codes == ["d1", "d2"]

        # Act / Assert: upsert after consuming a code
        found.consume_recovery_code("d1")
        await repo.save(found)
        assert (await repo.find_by_user_id(user.id)).recovery_codes == ["d2"]

        # Act / Assert: delete
        assert await repo.delete(user.id) is True
        assert await repo.find_by_user_id(user.id) is None
        assert await repo.delete(user.id) is False


@pytest.mark.integration
class TestPasswordHistoryRepository:
    """Test capped password history."""

    async def test_append_evicts_beyond_limit(self, db_session):
        # Arrange
        user = create_user()
        await UserRepository(db_session).save(user)
        repo = PasswordHistoryRepository(db_session)
        start = datetime.now(UTC)

        # Act
        for i in range(7):
            await repo.append(
                PasswordHistoryEntry(
                    id=uuid7(),
                    user_id=user.id,
                    password_hash=f"hash-{i}",
                    changed_at=start + timedelta(seconds=i),
                ),
                limit=5,
            )
        recent = await repo.find_recent(user.id, 10)

        # Assert
        assert [e.password_hash for e in recent] == [
            "hash-6",
            "hash-5",
            "hash-4",
            "hash-3",
            "hash-2",
        ]

    async def test_find_recent_zero_limit(self, db_session):
        repo = PasswordHistoryRepository(db_session)

        assert await repo.find_recent(uuid7(), 0) == []


@pytest.mark.integration
class TestRolePermissionLookup:
    """Test role and permission claims lookup."""

    async def test_roles_and_distinct_permissions(self, db_session):
        # Arrange
        user = create_user()
        await UserRepository(db_session).save(user)
        admin, auditor = Role(id=uuid7(), name="admin"), Role(id=uuid7(), name="auditor")
        read = Permission(id=uuid7(), code="audit:read")
        write = Permission(id=uuid7(), code="users:write")
        db_session.add_all([admin, auditor, read, write])
        await db_session.flush()
        await db_session.execute(
            insert(user_roles),
            [
                {"user_id": user.id, "role_id": admin.id},
                {"user_id": user.id, "role_id": auditor.id},
            ],
        )
        await db_session.execute(
            insert(role_permissions),
            [
                {"role_id": admin.id, "permission_id": read.id},
                {"role_id": admin.id, "permission_id": write.id},
                {"role_id": auditor.id, "permission_id": read.id},
            ],
        )
        await db_session.commit()
        lookup = SQLRolePermissionLookup(db_session)

        # Act
        roles = await lookup.get_role_names(user.id)
        permissions = await lookup.get_permission_codes(user.id)

        # Assert
        assert roles == ["admin", "auditor"]
        assert permissions == ["audit:read", "users:write"]

    async def test_user_without_roles(self, db_session):
        lookup = SQLRolePermissionLookup(db_session)

        assert await lookup.get_role_names(uuid7()) == []
        assert await lookup.get_permission_codes(uuid7()) == []
