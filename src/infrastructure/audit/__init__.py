"""Audit infrastructure implementations."""

from src.infrastructure.audit.logging_audit_adapter import LoggingAuditAdapter

__all__ = ["LoggingAuditAdapter"]
