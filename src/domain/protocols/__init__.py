"""Domain protocols (ports).

Application code depends on these protocols only. Infrastructure adapters
satisfy them structurally (PEP 544), without inheritance.
"""

from src.domain.protocols.audit_protocol import AuditProtocol
from src.domain.protocols.captcha_verifier_protocol import CaptchaVerifierProtocol
from src.domain.protocols.device_enricher_protocol import (
    DeviceEnricher,
    DeviceEnrichmentResult,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.notification_protocol import NotificationProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.password_history_repository import (
    PasswordHistoryRepository,
)
from src.domain.protocols.refresh_token_service_protocol import (
    RefreshTokenServiceProtocol,
)
from src.domain.protocols.role_permission_lookup import RolePermissionLookup
from src.domain.protocols.session_repository import SessionRepository
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol
from src.domain.protocols.totp_protocol import TotpProtocol
from src.domain.protocols.two_factor_settings_repository import (
    TwoFactorSettingsRepository,
)
from src.domain.protocols.user_repository import UserRepository

__all__ = [
    "AuditProtocol",
    "CaptchaVerifierProtocol",
    "DeviceEnricher",
    "DeviceEnrichmentResult",
    "LoggerProtocol",
    "NotificationProtocol",
    "PasswordHashingProtocol",
    "PasswordHistoryRepository",
    "RefreshTokenServiceProtocol",
    "RolePermissionLookup",
    "SessionRepository",
    "TokenGenerationProtocol",
    "TotpProtocol",
    "TwoFactorSettingsRepository",
    "UserRepository",
]
