"""Fail-open wrapper around the audit sink.

Handlers record each outcome through one AuditTrail call. A sink failure
(returned or raised) is logged as a warning and never changes the outcome of
the operation being audited.
"""

from typing import Any
from uuid import UUID

from src.core.result import Failure
from src.domain.enums import AuditAction
from src.domain.protocols import AuditProtocol, LoggerProtocol


class AuditTrail:
    """Records authentication attempts and security actions.

    Example:
        >>> trail = AuditTrail(audit=audit_adapter, logger=logger)
        >>> await trail.attempt(
        ...     action=AuditAction.USER_LOGIN_FAILED,
        ...     identifier="alice",
        ...     succeeded=False,
        ...     reason="invalid_credentials",
        ... )
    """

    def __init__(self, *, audit: AuditProtocol, logger: LoggerProtocol) -> None:
        self._audit = audit
        self._logger = logger

    async def attempt(
        self,
        *,
        action: AuditAction,
        identifier: str | None,
        succeeded: bool,
        user_id: UUID | None = None,
        reason: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> None:
        """Record one attempt outcome (fail-open)."""
        try:
            result = await self._audit.log_attempt(
                action=action,
                identifier=identifier,
                succeeded=succeeded,
                user_id=user_id,
                reason=reason,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        except Exception as e:
            self._logger.warning(
                "audit_record_failed", action=action.value, error=str(e)
            )
            return

        if isinstance(result, Failure):
            self._logger.warning(
                "audit_record_failed",
                action=action.value,
                error_code=result.error.code.value,
            )

    async def action(
        self,
        *,
        action: AuditAction,
        user_id: UUID | None,
        context: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> None:
        """Record a security action (fail-open)."""
        try:
            result = await self._audit.log_action(
                action=action,
                user_id=user_id,
                context=context,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        except Exception as e:
            self._logger.warning(
                "audit_record_failed", action=action.value, error=str(e)
            )
            return

        if isinstance(result, Failure):
            self._logger.warning(
                "audit_record_failed",
                action=action.value,
                error_code=result.error.code.value,
            )

    async def unexpected_error(
        self,
        *,
        operation: str,
        user_id: UUID | None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> None:
        """Record an operation that failed on an unexpected error (fail-open)."""
        await self.action(
            action=AuditAction.UNEXPECTED_ERROR,
            user_id=user_id,
            context={"operation": operation},
            ip_address=ip_address,
            user_agent=user_agent,
        )
