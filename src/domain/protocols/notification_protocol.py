"""Notification sender protocol (port).

Delivers one-time codes over email or SMS. Outbound delivery is an external
collaborator; only the interface is defined here.
"""

from typing import Protocol

from src.core.errors import DomainError
from src.core.result import Result
from src.domain.enums import TwoFactorMethod


class NotificationProtocol(Protocol):
    """Outbound code delivery."""

    async def send_code(
        self,
        destination: str,
        code: str,
        method: TwoFactorMethod,
    ) -> Result[None, DomainError]:
        """Send a one-time code.

        Args:
            destination: Email address or phone number.
            code: The code to deliver.
            method: EMAIL or SMS.

        Returns:
            Success(None) when handed off, Failure(DomainError) otherwise.
        """
        ...
