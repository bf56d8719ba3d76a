"""Unit tests for User domain entity.

Tests cover:
- Construction invariants (lockout_end only while BLOCKED)
- register_failed_attempt() counting and locking at the threshold
- lock()/unlock() transitions
- is_locked() for temporary and administrative blocks
- Lifecycle transitions (confirm, suspend, reactivate, delete)
- Password change/reset bookkeeping

Architecture:
- Unit tests for domain entity (no dependencies)
- Tests pure business logic
"""

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from src.domain.entities.user import User
from src.domain.enums import UserStatus
from tests.conftest import create_user

LOCKOUT = timedelta(minutes=15)


@pytest.mark.unit
class TestUserCreation:
    """Test User entity creation."""

    def test_user_defaults_to_registered_and_unconfirmed(self):
        """Test a new User starts REGISTERED with a zero failure counter."""
        # Act
        user = User(
            id=uuid7(),
            username="bob",
            email="bob@example.com",
            password_hash="hash",
        )

        # Assert
        assert user.status == UserStatus.REGISTERED
        assert user.email_confirmed is False
        assert user.access_failed_count == 0
        assert user.lockout_end is None
        assert user.lockout_enabled is True

    def test_lockout_end_without_blocked_status_rejected(self):
        """Test constructing an ACTIVE user with a lockout window fails."""
        with pytest.raises(ValueError, match="lockout_end"):
            create_user(
                status=UserStatus.ACTIVE,
                lockout_end=datetime.now(UTC) + LOCKOUT,
            )

    def test_negative_failure_counter_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            create_user(access_failed_count=-1)


@pytest.mark.unit
class TestUserFailedAttempts:
    """Test failed attempt counting and lockout."""

    def test_failures_below_threshold_only_increment(self):
        """Test four failures leave the account ACTIVE."""
        # Arrange
        user = create_user()

        # Act
        locked = [user.register_failed_attempt(5, LOCKOUT) for _ in range(4)]

        # Assert
        assert locked == [False, False, False, False]
        assert user.access_failed_count == 4
        assert user.status == UserStatus.ACTIVE
        assert user.lockout_end is None

    @freeze_time("2026-10-19 09:00:00")
    def test_fifth_failure_locks_for_lockout_duration(self):
        """Test the fifth consecutive failure locks the account for 15 minutes."""
        # Arrange
        user = create_user(access_failed_count=4)
        now = datetime.now(UTC)

        # Act
        locked = user.register_failed_attempt(5, LOCKOUT, now)

        # Assert
        assert locked is True
        assert user.status == UserStatus.BLOCKED
        assert user.access_failed_count == 5
        assert user.lockout_end == now + LOCKOUT
        assert user.is_locked(now) is True

    def test_threshold_locks_even_with_lockout_flag_off(self):
        """Test five failures block every user, whatever lockout_enabled says."""
        # Arrange
        user = create_user(lockout_enabled=False)
        now = datetime.now(UTC)

        # Act
        results = [user.register_failed_attempt(5, LOCKOUT, now) for _ in range(5)]

        # Assert
        assert results == [False, False, False, False, True]
        assert user.access_failed_count == 5
        assert user.status == UserStatus.BLOCKED
        assert user.lockout_end == now + LOCKOUT

    def test_successful_login_resets_counter(self):
        """Test a verified password clears the failure counter."""
        # Arrange
        user = create_user(access_failed_count=3)
        now = datetime.now(UTC)

        # Act
        user.record_successful_login(now)

        # Assert
        assert user.access_failed_count == 0
        assert user.last_login_at == now

    def test_deleted_user_ignores_failures(self):
        user = create_user(status=UserStatus.DELETED)

        assert user.register_failed_attempt(1, LOCKOUT) is False
        assert user.access_failed_count == 0
        assert user.status == UserStatus.DELETED


@pytest.mark.unit
class TestUserLocking:
    """Test lock state queries and transitions."""

    def test_is_locked_false_after_window_closes(self):
        """Test a BLOCKED user with a past lockout_end is no longer locked."""
        # Arrange
        now = datetime.now(UTC)
        user = create_user(status=UserStatus.BLOCKED, lockout_end=now - timedelta(seconds=1))

        # Assert
        assert user.is_locked(now) is False
        assert user.lockout_expired(now) is True
        assert user.lockout_remaining(now) is None

    def test_admin_block_has_no_end_and_stays_locked(self):
        """Test lock(None) blocks indefinitely."""
        # Arrange
        user = create_user()

        # Act
        user.lock(None)

        # Assert
        assert user.status == UserStatus.BLOCKED
        assert user.lockout_end is None
        assert user.is_locked(datetime.now(UTC) + timedelta(days=365)) is True
        assert user.lockout_expired() is False

    def test_lockout_remaining_reports_time_left(self):
        now = datetime.now(UTC)
        user = create_user(status=UserStatus.BLOCKED, lockout_end=now + timedelta(minutes=10))

        assert user.lockout_remaining(now) == timedelta(minutes=10)

    def test_unlock_restores_active_and_clears_state(self):
        """Test unlock() sets ACTIVE, clears lockout_end and the counter."""
        # Arrange
        now = datetime.now(UTC)
        user = create_user(
            status=UserStatus.BLOCKED,
            lockout_end=now + LOCKOUT,
            access_failed_count=5,
        )

        # Act
        user.unlock(now)

        # Assert
        assert user.status == UserStatus.ACTIVE
        assert user.lockout_end is None
        assert user.access_failed_count == 0
        assert user.is_locked(now) is False

    def test_delete_is_terminal(self):
        """Test no transition leaves DELETED."""
        # Arrange
        user = create_user()
        user.delete()

        # Act
        user.unlock()
        user.lock(LOCKOUT)
        user.confirm_email()
        user.reactivate()

        # Assert
        assert user.status == UserStatus.DELETED
        assert user.lockout_end is None


@pytest.mark.unit
class TestUserLifecycle:
    """Test status lifecycle transitions."""

    def test_confirm_email_activates_registered_user(self):
        user = create_user(status=UserStatus.REGISTERED, email_confirmed=False)

        user.confirm_email()

        assert user.email_confirmed is True
        assert user.status == UserStatus.ACTIVE

    def test_suspend_and_reactivate(self):
        user = create_user()

        user.suspend()
        assert user.status == UserStatus.SUSPENDED

        user.reactivate()
        assert user.status == UserStatus.ACTIVE

    def test_reactivate_ignores_blocked_user(self):
        """Test reactivate() only applies to SUSPENDED accounts."""
        user = create_user(status=UserStatus.BLOCKED)

        user.reactivate()

        assert user.status == UserStatus.BLOCKED

    def test_matches_identifier_is_case_insensitive(self):
        user = create_user(username="Alice", email="Alice@Example.com")

        assert user.matches_identifier("alice")
        assert user.matches_identifier("  ALICE@example.COM ")
        assert not user.matches_identifier("bob")


@pytest.mark.unit
class TestUserPasswordTransitions:
    """Test password change and reset bookkeeping."""

    def test_change_password_clears_forced_change(self):
        # Arrange
        user = create_user()
        user.require_password_change = True
        now = datetime.now(UTC)

        # Act
        user.change_password("new_hash", now)

        # Assert
        assert user.password_hash == "new_hash"
        assert user.last_password_change_at == now
        assert user.require_password_change is False

    def test_reset_password_forces_change_at_next_login(self):
        user = create_user()

        user.reset_password("reset_hash")

        assert user.password_hash == "reset_hash"
        assert user.require_password_change is True
        assert user.last_password_change_at is not None
