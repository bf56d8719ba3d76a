"""Notification sender implementations.

- StubNotificationService: log-only sender for development/testing
"""

from src.infrastructure.notification.stub_notification_service import (
    StubNotificationService,
)

__all__ = ["StubNotificationService"]
