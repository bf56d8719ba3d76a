"""Unit tests for domain policies and the SecurityPolicy value object.

Tests cover:
- AccountLockoutPolicy thresholds, release of expired lockouts, admin blocks
- PasswordPolicy rule evaluation (every violation reported)
- SecurityPolicy validation and lifetimes
"""

from datetime import UTC, datetime, timedelta

import pytest

from src.domain.enums import UserStatus
from src.domain.policies import AccountLockoutPolicy, PasswordPolicy
from src.domain.value_objects import SecurityPolicy
from tests.conftest import create_user


@pytest.mark.unit
class TestAccountLockoutPolicy:
    """Test the lockout state machine driven by SecurityPolicy."""

    def test_policy_threshold_controls_lockout(self):
        """Test a threshold of 3 locks on the third failure."""
        # Arrange
        lockout = AccountLockoutPolicy(
            SecurityPolicy(max_failed_access_attempts=3, lockout_duration=timedelta(minutes=5))
        )
        user = create_user()
        now = datetime.now(UTC)

        # Act
        results = [lockout.register_failure(user, now) for _ in range(3)]

        # Assert
        assert results == [False, False, True]
        assert user.lockout_end == now + timedelta(minutes=5)

    def test_threshold_locks_user_with_lockout_flag_off(self):
        """Test the per-user flag cannot exempt an account from lockout."""
        # Arrange
        lockout = AccountLockoutPolicy(SecurityPolicy())
        user = create_user(lockout_enabled=False)
        now = datetime.now(UTC)

        # Act
        results = [lockout.register_failure(user, now) for _ in range(5)]

        # Assert
        assert results[-1] is True
        assert user.status == UserStatus.BLOCKED
        assert user.is_locked(now) is True

    def test_release_if_expired_unlocks_after_window(self):
        """Test an expired lockout is released and the counter reset."""
        # Arrange
        lockout = AccountLockoutPolicy(SecurityPolicy())
        now = datetime.now(UTC)
        user = create_user(
            status=UserStatus.BLOCKED,
            lockout_end=now - timedelta(seconds=1),
            access_failed_count=5,
        )

        # Act
        released = lockout.release_if_expired(user, now)

        # Assert
        assert released is True
        assert user.status == UserStatus.ACTIVE
        assert user.access_failed_count == 0
        assert user.lockout_end is None

    def test_release_if_expired_keeps_open_lockout(self):
        lockout = AccountLockoutPolicy(SecurityPolicy())
        now = datetime.now(UTC)
        user = create_user(status=UserStatus.BLOCKED, lockout_end=now + timedelta(minutes=1))

        assert lockout.release_if_expired(user, now) is False
        assert user.status == UserStatus.BLOCKED

    def test_release_if_expired_never_releases_admin_block(self):
        """Test an administrative block (no lockout_end) is never auto-released."""
        # Arrange
        lockout = AccountLockoutPolicy(SecurityPolicy())
        user = create_user()
        lockout.block(user)

        # Act
        released = lockout.release_if_expired(user, datetime.now(UTC) + timedelta(days=30))

        # Assert
        assert released is False
        assert lockout.is_locked(user) is True

    def test_unlock_and_reset(self):
        lockout = AccountLockoutPolicy(SecurityPolicy())
        user = create_user(access_failed_count=2)

        lockout.reset(user)
        assert user.access_failed_count == 0

        lockout.lock(user)
        assert lockout.remaining(user) is not None

        lockout.unlock(user)
        assert user.status == UserStatus.ACTIVE
        assert lockout.remaining(user) is None


@pytest.mark.unit
class TestPasswordPolicy:
    """Test password strength rules."""

    def test_strong_password_has_no_violations(self):
        policy = PasswordPolicy(SecurityPolicy())

        assert policy.violations("SecurePass123!") == []
        assert policy.is_satisfied_by("SecurePass123!") is True

    def test_weak_password_reports_every_violation(self):
        """Test all violated rules are returned in rule order."""
        # Arrange
        policy = PasswordPolicy(SecurityPolicy())

        # Act
        violations = policy.violations("abc")

        # Assert
        assert violations == [
            "Password must be at least 8 characters",
            "Password must contain a digit",
            "Password must contain an uppercase letter",
            "Password must contain a non-alphanumeric character",
        ]

    def test_maximum_length_enforced(self):
        policy = PasswordPolicy(SecurityPolicy(password_max_length=12))

        assert "Password must be at most 12 characters" in policy.violations(
            "SecurePass123!xyz"
        )

    def test_disabled_rules_are_skipped(self):
        """Test toggled-off character classes are not required."""
        # Arrange
        policy = PasswordPolicy(
            SecurityPolicy(
                require_digit=False,
                require_uppercase=False,
                require_non_alphanumeric=False,
            )
        )

        # Assert
        assert policy.violations("lowercaseonly") == []


@pytest.mark.unit
class TestSecurityPolicy:
    """Test SecurityPolicy validation."""

    def test_defaults(self):
        policy = SecurityPolicy()

        assert policy.max_failed_access_attempts == 5
        assert policy.lockout_duration == timedelta(minutes=15)
        assert policy.password_history_limit == 5
        assert policy.token_lifetime(extended=False) == timedelta(hours=2)
        assert policy.token_lifetime(extended=True) == timedelta(days=7)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_failed_access_attempts": 0},
            {"lockout_duration": timedelta(0)},
            {"password_min_length": 10, "password_max_length": 8},
            {"password_history_limit": -1},
            {"access_token_lifetime": timedelta(seconds=-1)},
            {"recovery_code_count": 0},
        ],
    )
    def test_invalid_thresholds_rejected(self, overrides):
        with pytest.raises(ValueError):
            SecurityPolicy(**overrides)
