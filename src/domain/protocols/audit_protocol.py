"""Audit sink protocol (port).

The authentication core reports every login outcome and every
security-relevant action to an audit sink. Persisting the audit trail is the
sink's concern; this service only defines the contract.

Following hexagonal architecture:
- Domain defines the PORT (this protocol)
- Infrastructure provides ADAPTERS (LoggingAuditAdapter, ...)
- Application layer uses the protocol

Fail-open:
    Callers treat a Failure from the sink as a warning. An audit failure
    never rolls back a recorded failed attempt, lockout or revocation.

Usage:
    result = await audit.log_attempt(
        action=AuditAction.USER_LOGIN_FAILED,
        identifier="alice",
        succeeded=False,
        reason=ErrorCode.INVALID_CREDENTIALS.value,
        ip_address=context.ip_address,
        user_agent=context.user_agent,
    )
"""

from typing import Any, Protocol
from uuid import UUID

from src.core.errors import DomainError
from src.core.result import Result
from src.domain.enums import AuditAction


class AuditProtocol(Protocol):
    """Protocol for audit sinks."""

    async def log_attempt(
        self,
        *,
        action: AuditAction,
        identifier: str | None,
        succeeded: bool,
        user_id: UUID | None = None,
        reason: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Result[None, DomainError]:
        """Record one authentication attempt outcome.

        Args:
            action: Outcome category (login success/failure, 2FA pending, ...).
            identifier: Username or email presented by the caller.
            succeeded: Whether the attempt succeeded.
            user_id: Resolved user, if any.
            reason: Failure reason (an ErrorCode value).
            ip_address: Client IP address.
            user_agent: Client user agent.

        Returns:
            Success(None) when recorded, Failure(DomainError) otherwise.
        """
        ...

    async def log_action(
        self,
        *,
        action: AuditAction,
        user_id: UUID | None,
        context: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Result[None, DomainError]:
        """Record a security-relevant action (logout, password change, ...).

        Returns:
            Success(None) when recorded, Failure(DomainError) otherwise.
        """
        ...
