"""Unit tests for side-channel adapters.

Tests cover:
- LoggingAuditAdapter event emission
- ConsoleAdapter delegation and credential redaction
- RecaptchaVerifier (HTTP mocked with pytest-httpx), fail-closed behavior
- UserAgentDeviceEnricher parsing
- StubNotificationService recording
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest
import structlog
from uuid_extensions import uuid7

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import AuditAction, TwoFactorMethod
from src.infrastructure.audit import LoggingAuditAdapter
from src.infrastructure.captcha import AllowAllCaptchaVerifier, RecaptchaVerifier
from src.infrastructure.enrichers import UserAgentDeviceEnricher
from src.infrastructure.logging.console_adapter import (
    REDACTED,
    ConsoleAdapter,
    redact_sensitive,
)
from src.infrastructure.notification import StubNotificationService

VERIFY_URL = "https://captcha.test/siteverify"
CHROME_MAC = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@pytest.fixture(autouse=True)
def reset_structlog():
    """ConsoleAdapter reconfigures structlog globally; undo after each test."""
    yield
    structlog.reset_defaults()


@pytest.mark.unit
class TestLoggingAuditAdapter:
    """Test audit events reach the structured log."""

    async def test_log_attempt_emits_event(self):
        # Arrange
        adapter = LoggingAuditAdapter()
        user_id = uuid7()

        # Act
        with patch("src.infrastructure.audit.logging_audit_adapter.logger") as mock_logger:
            result = await adapter.log_attempt(
                action=AuditAction.USER_LOGIN_FAILED,
                identifier="alice",
                succeeded=False,
                user_id=user_id,
                reason="invalid_credentials",
                ip_address="203.0.113.7",
            )

        # Assert
        assert isinstance(result, Success)
        args, kwargs = mock_logger.info.call_args
        assert args == ("audit_event",)
        assert kwargs["action"] == "user_login_failed"
        assert kwargs["user_id"] == str(user_id)
        assert kwargs["succeeded"] is False

    async def test_log_action_flattens_context(self):
        adapter = LoggingAuditAdapter()

        with patch("src.infrastructure.audit.logging_audit_adapter.logger") as mock_logger:
            await adapter.log_action(
                action=AuditAction.PASSWORD_CHANGED,
                user_id=None,
                context={"revoked_sessions": 3},
            )

        kwargs = mock_logger.info.call_args.kwargs
        assert kwargs["revoked_sessions"] == 3
        assert kwargs["user_id"] is None

    async def test_emit_failure_returned_not_raised(self):
        adapter = LoggingAuditAdapter()

        with patch("src.infrastructure.audit.logging_audit_adapter.logger") as mock_logger:
            mock_logger.info.side_effect = TypeError("unserializable")
            result = await adapter.log_action(action=AuditAction.USER_LOGOUT, user_id=None)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.AUDIT_RECORD_FAILED

@pytest.mark.unit
class TestConsoleAdapter:
    """Test ConsoleAdapter delegation and redaction."""

    def test_info_delegates_to_structlog(self):
        with patch("src.infrastructure.logging.console_adapter.structlog") as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.info("session_created", user_id="123")

            mock_logger.info.assert_called_once_with("session_created", user_id="123")

    def test_error_adds_exception_details(self):
        with patch("src.infrastructure.logging.console_adapter.structlog") as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.error("login_unexpected_error", error=RuntimeError("boom"))

            mock_logger.error.assert_called_once_with(
                "login_unexpected_error",
                error_type="RuntimeError",
                error_message="boom",
            )

    def test_bind_returns_new_adapter(self):
        with patch("src.infrastructure.logging.console_adapter.structlog") as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            bound = adapter.bind(app="AuthCore")

            assert bound is not adapter
            mock_logger.bind.assert_called_once_with(app="AuthCore")

    def test_redaction_masks_credentials(self):
        """Test secrets never reach the renderer."""
        # Act
        event = redact_sensitive(
            None,
            "info",
            {
                "event": "login",
                "password": "SecurePass123!",
                "refresh_token": "abc",
                "code": "123456",
                "user_id": "u1",
            },
        )

        # Assert
        assert event["password"] == REDACTED
        assert event["refresh_token"] == REDACTED
        assert event["code"] == REDACTED
        assert event["user_id"] == "u1"

    def test_json_output_is_redacted(self, capsys):
        adapter = ConsoleAdapter(use_json=True)

        adapter.info("login_attempt", password="SecurePass123!", user_id="u1")

        out = capsys.readouterr().out
        assert "SecurePass123!" not in out
        assert REDACTED in out


@pytest.mark.unit
class TestRecaptchaVerifier:
    """Test reCAPTCHA verification with mocked HTTP."""

    def _verifier(self) -> RecaptchaVerifier:
        return RecaptchaVerifier(secret_key="secret", min_score=0.5, verify_url=VERIFY_URL)

    async def test_success_accepted(self, httpx_mock):
        httpx_mock.add_response(url=VERIFY_URL, json={"success": True, "score": 0.9})

        assert await self._verifier().validate("proof", "203.0.113.7") is True

    async def test_provider_rejection(self, httpx_mock):
        httpx_mock.add_response(
            url=VERIFY_URL,
            json={"success": False, "error-codes": ["invalid-input-response"]},
        )

        assert await self._verifier().validate("proof") is False

    async def test_low_score_rejected(self, httpx_mock):
        httpx_mock.add_response(url=VERIFY_URL, json={"success": True, "score": 0.1})

        assert await self._verifier().validate("proof") is False

    async def test_timeout_fails_closed(self, httpx_mock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        assert await self._verifier().validate("proof") is False

    async def test_server_error_fails_closed(self, httpx_mock):
        httpx_mock.add_response(url=VERIFY_URL, status_code=500)

        assert await self._verifier().validate("proof") is False

    async def test_empty_proof_rejected_without_request(self):
        assert await self._verifier().validate("") is False

    async def test_allow_all(self):
        assert await AllowAllCaptchaVerifier().validate("anything") is True


@pytest.mark.unit
class TestUserAgentDeviceEnricher:
    """Test user agent parsing."""

    def test_desktop_browser(self):
        result = UserAgentDeviceEnricher().enrich(CHROME_MAC)

        assert result.device_info == "Chrome on Mac OS X"
        assert result.browser == "Chrome"
        assert result.device_type == "desktop"

    def test_missing_user_agent(self):
        result = UserAgentDeviceEnricher().enrich(None)

        assert result.device_info is None
        assert result.device_type is None


@pytest.mark.unit
class TestStubNotificationService:
    """Test the log-only notification sender."""

    async def test_records_destination_without_logging_code(self):
        # Arrange
        service = StubNotificationService()

        # Act
        with patch(
            "src.infrastructure.notification.stub_notification_service.logger"
        ) as mock_logger:
            result = await service.send_code("+15550100", "123456", TwoFactorMethod.SMS)

        # Assert
        assert isinstance(result, Success)
        assert service.sent == [("+15550100", TwoFactorMethod.SMS)]
        assert "otp" not in mock_logger.info.call_args.kwargs

    async def test_expose_codes_logs_code(self):
        service = StubNotificationService(expose_codes=True)

        with patch(
            "src.infrastructure.notification.stub_notification_service.logger"
        ) as mock_logger:
            await service.send_code("alice@example.com", "123456", TwoFactorMethod.EMAIL)

        assert mock_logger.info.call_args.kwargs["otp"] == "123456"
