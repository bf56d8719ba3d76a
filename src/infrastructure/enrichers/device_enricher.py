"""Device enricher implementation using the user-agents library.

Parses user agent strings into the short device description stored on each
session. Implements DeviceEnricher protocol with fail-open behavior.
"""

import structlog
from user_agents import parse as parse_user_agent  # type: ignore[import-untyped]
from user_agents.parsers import UserAgent  # type: ignore[import-untyped]

from src.domain.protocols import DeviceEnrichmentResult

logger = structlog.get_logger(__name__)

_MAX_LOGGED_AGENT = 100


class UserAgentDeviceEnricher:
    """Device enricher using the user-agents library.

    Behavior:
        - Fail-open: Returns empty result on parse errors
        - Best-effort: Unknown agents return partial data
    """

    def enrich(self, user_agent: str | None) -> DeviceEnrichmentResult:
        """Parse user agent string to extract device information.

        Args:
            user_agent: Raw user agent string from the client.

        Returns:
            DeviceEnrichmentResult with parsed device info.
            Returns empty result (all None) on parse failure.
        """
        if not user_agent:
            return DeviceEnrichmentResult()

        try:
            ua: UserAgent = parse_user_agent(user_agent)
        except (TypeError, ValueError) as e:
            logger.warning(
                "user_agent_parse_failed",
                user_agent=user_agent[:_MAX_LOGGED_AGENT],
                error=str(e),
            )
            return DeviceEnrichmentResult()

        browser = _known(ua.browser.family)
        os_name = _known(ua.os.family)
        return DeviceEnrichmentResult(
            device_info=_describe(browser, os_name),
            browser=browser,
            os=os_name,
            device_type=_device_type(ua),
        )


def _known(family: str | None) -> str | None:
    if not family or family == "Other":
        return None
    return family


def _device_type(ua: UserAgent) -> str:
    if ua.is_bot:
        return "bot"
    if ua.is_mobile:
        return "mobile"
    if ua.is_tablet:
        return "tablet"
    if ua.is_pc:
        return "desktop"
    return "other"


def _describe(browser: str | None, os_name: str | None) -> str | None:
    """Build "Chrome on Mac OS X" style text, or None if nothing is known."""
    if browser and os_name:
        return f"{browser} on {os_name}"
    if browser:
        return browser
    if os_name:
        return f"Unknown browser on {os_name}"
    return None
