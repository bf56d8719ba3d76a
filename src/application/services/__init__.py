"""Application services shared by several handlers."""

from src.application.services.audit_trail import AuditTrail
from src.application.services.password_policy_service import PasswordPolicyService
from src.application.services.session_token_service import SessionTokenService

__all__ = [
    "AuditTrail",
    "PasswordPolicyService",
    "SessionTokenService",
]
