"""Two-factor authentication commands."""

from dataclasses import dataclass, field
from uuid import UUID

from src.application.dtos.auth_dtos import LoginContext
from src.domain.enums import TwoFactorMethod


@dataclass(frozen=True, kw_only=True)
class VerifyTwoFactor:
    """Complete a login with a TOTP code or a recovery code.

    Attributes:
        user_id: User from the TwoFactorChallenge.
        code: 6-digit TOTP code or an unused recovery code.
        remember_me: Request an extended session lifetime.
        context: Client metadata for the new session.
    """

    user_id: UUID
    code: str = field(repr=False)
    remember_me: bool = False
    context: LoginContext = field(default_factory=LoginContext)


@dataclass(frozen=True, kw_only=True)
class EnableTwoFactor:
    """Enroll the user in two-factor authentication.

    Attributes:
        user_id: User enabling 2FA.
        method: Delivery method for codes.
    """

    user_id: UUID
    method: TwoFactorMethod = TwoFactorMethod.AUTHENTICATOR


@dataclass(frozen=True, kw_only=True)
class DisableTwoFactor:
    """Turn two-factor authentication off (requires the password).

    Attributes:
        user_id: User disabling 2FA.
        password: Current password, re-verified.
    """

    user_id: UUID
    password: str = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class SendTwoFactorCode:
    """Deliver the current code by email or SMS."""

    user_id: UUID
