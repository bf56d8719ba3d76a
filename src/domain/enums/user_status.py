"""User account lifecycle states.

Defines the status state machine for user accounts.

State Machine:
    REGISTERED → ACTIVE ↔ BLOCKED
    ACTIVE ↔ SUSPENDED
    Any → DELETED (terminal)

    - REGISTERED: Account created, email not yet confirmed
    - ACTIVE: Account can authenticate
    - SUSPENDED: Administratively disabled
    - BLOCKED: Locked (temporary lockout or administrative block)
    - DELETED: Soft-deleted (terminal)

Usage:
    from src.domain.enums import UserStatus

    if user.status == UserStatus.ACTIVE:
        # Proceed with password verification
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account lifecycle states.

    String Enum:
        Inherits from str for easy serialization and database storage.
        Values are lowercase for consistency.

    State Transitions:
        REGISTERED → ACTIVE: Email confirmed
        ACTIVE → BLOCKED: Failed-attempt threshold reached or admin lock
        BLOCKED → ACTIVE: Lockout expired or admin unlock
        ACTIVE → SUSPENDED: Admin suspension
        SUSPENDED → ACTIVE: Admin reactivation
        Any → DELETED: Account deletion (terminal)
    """

    REGISTERED = "registered"
    """Account created, email confirmation pending."""

    ACTIVE = "active"
    """Account is in good standing and may log in."""

    SUSPENDED = "suspended"
    """Account disabled by an administrator."""

    BLOCKED = "blocked"
    """Account locked.

    Temporary when ``lockout_end`` is set (failed-attempt lockout),
    indefinite when ``lockout_end`` is None (administrative block).
    """

    DELETED = "deleted"
    """Account deleted. No transition leaves this state."""

    @property
    def is_terminal(self) -> bool:
        """True for states that cannot transition anywhere else."""
        return self == UserStatus.DELETED
