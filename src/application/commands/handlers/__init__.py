"""Command handlers."""

from src.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from src.application.commands.handlers.change_password_handler import (
    ChangePasswordHandler,
)
from src.application.commands.handlers.disable_two_factor_handler import (
    DisableTwoFactorHandler,
)
from src.application.commands.handlers.enable_two_factor_handler import (
    EnableTwoFactorHandler,
)
from src.application.commands.handlers.logout_user_handler import LogoutUserHandler
from src.application.commands.handlers.refresh_access_token_handler import (
    RefreshAccessTokenHandler,
)
from src.application.commands.handlers.reset_user_password_handler import (
    ResetUserPasswordHandler,
)
from src.application.commands.handlers.send_two_factor_code_handler import (
    SendTwoFactorCodeHandler,
)
from src.application.commands.handlers.unlock_account_handler import (
    UnlockAccountHandler,
)
from src.application.commands.handlers.verify_two_factor_handler import (
    VerifyTwoFactorHandler,
)

__all__ = [
    "AuthenticateUserHandler",
    "ChangePasswordHandler",
    "DisableTwoFactorHandler",
    "EnableTwoFactorHandler",
    "LogoutUserHandler",
    "RefreshAccessTokenHandler",
    "ResetUserPasswordHandler",
    "SendTwoFactorCodeHandler",
    "UnlockAccountHandler",
    "VerifyTwoFactorHandler",
]
