"""Stub notification sender for development and testing.

Logs each outbound code instead of delivering it. Real email/SMS delivery is
an external collaborator wired in place of this adapter.

The code itself is logged only when ``expose_codes`` is set (local
development), never by default.
"""

import structlog

from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.enums import TwoFactorMethod

logger = structlog.get_logger(__name__)


class StubNotificationService:
    """NotificationProtocol implementation that only logs.

    Attributes:
        sent: Every (destination, method) handed to the stub, in order.
    """

    def __init__(self, *, expose_codes: bool = False) -> None:
        self._expose_codes = expose_codes
        self.sent: list[tuple[str, TwoFactorMethod]] = []

    async def send_code(
        self,
        destination: str,
        code: str,
        method: TwoFactorMethod,
    ) -> Result[None, DomainError]:
        self.sent.append((destination, method))
        logger.info(
            "notification_code_sent",
            destination=destination,
            method=method.value,
            **({"otp": code} if self._expose_codes else {}),
        )
        return Success(value=None)
