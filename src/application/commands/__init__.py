"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (AuthenticateUser, ChangePassword).

Each command has a corresponding handler that contains the business logic
to execute the command.
"""

from src.application.commands.auth_commands import (
    AuthenticateUser,
    LogoutUser,
    RefreshAccessToken,
    UnlockAccount,
)
from src.application.commands.password_commands import (
    ChangePassword,
    ResetUserPassword,
)
from src.application.commands.two_factor_commands import (
    DisableTwoFactor,
    EnableTwoFactor,
    SendTwoFactorCode,
    VerifyTwoFactor,
)

__all__ = [
    # Auth commands
    "AuthenticateUser",
    "LogoutUser",
    "RefreshAccessToken",
    "UnlockAccount",
    # Password commands
    "ChangePassword",
    "ResetUserPassword",
    # Two-factor commands
    "DisableTwoFactor",
    "EnableTwoFactor",
    "SendTwoFactorCode",
    "VerifyTwoFactor",
]
