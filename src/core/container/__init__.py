"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_authenticate_user_handler, get_db_session

The container is organized into modules:
- infrastructure: App-scoped services (database, hashing, tokens, logging, ...)
- repositories: Repository factories bound to one AsyncSession
- auth_handlers: Application services and handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_audit,
    get_captcha_verifier,
    get_database,
    get_db_session,
    get_device_enricher,
    get_jwt_service,
    get_logger,
    get_notification_service,
    get_password_service,
    get_refresh_token_service,
    get_security_policy,
    get_totp_service,
)

# Repositories
from src.core.container.repositories import (
    get_password_history_repository,
    get_role_permission_lookup,
    get_session_repository,
    get_two_factor_settings_repository,
    get_user_repository,
)

# Auth services and handlers
from src.core.container.auth_handlers import (
    get_audit_trail,
    get_authenticate_user_handler,
    get_change_password_handler,
    get_disable_two_factor_handler,
    get_enable_two_factor_handler,
    get_list_sessions_handler,
    get_lockout_policy,
    get_logout_user_handler,
    get_password_policy_service,
    get_refresh_token_handler,
    get_reset_user_password_handler,
    get_send_two_factor_code_handler,
    get_session_token_service,
    get_unlock_account_handler,
    get_verify_two_factor_handler,
)

__all__ = [
    # Infrastructure
    "get_audit",
    "get_captcha_verifier",
    "get_database",
    "get_db_session",
    "get_device_enricher",
    "get_jwt_service",
    "get_logger",
    "get_notification_service",
    "get_password_service",
    "get_refresh_token_service",
    "get_security_policy",
    "get_totp_service",
    # Repositories
    "get_password_history_repository",
    "get_role_permission_lookup",
    "get_session_repository",
    "get_two_factor_settings_repository",
    "get_user_repository",
    # Auth
    "get_audit_trail",
    "get_authenticate_user_handler",
    "get_change_password_handler",
    "get_disable_two_factor_handler",
    "get_enable_two_factor_handler",
    "get_list_sessions_handler",
    "get_lockout_policy",
    "get_logout_user_handler",
    "get_password_policy_service",
    "get_refresh_token_handler",
    "get_reset_user_password_handler",
    "get_send_two_factor_code_handler",
    "get_session_token_service",
    "get_unlock_account_handler",
    "get_verify_two_factor_handler",
]
