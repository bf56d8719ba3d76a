"""Structured-log implementation of AuditProtocol.

Writes one structured log line per audit event under the ``audit`` logger.
Long-term storage of the audit trail belongs to the log pipeline, outside
this service.

Usage:
    from src.infrastructure.audit import LoggingAuditAdapter

    audit = LoggingAuditAdapter()
    await audit.log_action(action=AuditAction.USER_LOGOUT, user_id=user.id)
"""

from typing import Any
from uuid import UUID

import structlog

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction

logger = structlog.get_logger("audit")


class LoggingAuditAdapter:
    """Audit sink that emits structured log events.

    Implements AuditProtocol via structural typing.
    """

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
        return self._emit(
            action,
            identifier=identifier,
            succeeded=succeeded,
            user_id=str(user_id) if user_id else None,
            reason=reason,
            ip_address=ip_address,
            user_agent=user_agent,
        )

    async def log_action(
        self,
        *,
        action: AuditAction,
        user_id: UUID | None,
        context: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Result[None, DomainError]:
        return self._emit(
            action,
            user_id=str(user_id) if user_id else None,
            ip_address=ip_address,
            user_agent=user_agent,
            **(context or {}),
        )

    def _emit(self, action: AuditAction, **fields: Any) -> Result[None, DomainError]:
        try:
            logger.info("audit_event", action=action.value, **fields)
        except (TypeError, ValueError) as e:
            return Failure(
                error=DomainError(
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    message=f"Failed to record audit event: {e}",
                )
            )
        return Success(value=None)
