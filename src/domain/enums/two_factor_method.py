"""Second-factor delivery methods.

Usage:
    from src.domain.enums import TwoFactorMethod

    if settings.method is TwoFactorMethod.SMS:
        await notifications.send_code(phone, code, TwoFactorMethod.SMS)
"""

from enum import Enum


class TwoFactorMethod(str, Enum):
    """How the user receives (or computes) their one-time code.

    AUTHENTICATOR codes are computed by the user's app from the shared
    secret. EMAIL and SMS codes are computed server-side and delivered
    through the notification sender.
    """

    AUTHENTICATOR = "authenticator"
    EMAIL = "email"
    SMS = "sms"

    @property
    def requires_delivery(self) -> bool:
        """True if the server must send the code to the user."""
        return self in (TwoFactorMethod.EMAIL, TwoFactorMethod.SMS)
