"""Device enricher protocol.

Turns a raw user agent into the short device description stored on a session
("Chrome on Mac OS X").
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True, kw_only=True)
class DeviceEnrichmentResult:
    """Parsed device details.

    Attributes:
        device_info: Human-readable device info ("Chrome on Mac OS X").
        browser: Browser family ("Chrome", "Firefox").
        os: Operating system family ("Mac OS X", "Android").
        device_type: "mobile", "tablet", "desktop", "bot" or "other".
    """

    device_info: str | None = None
    browser: str | None = None
    os: str | None = None
    device_type: str | None = None


class DeviceEnricher(Protocol):
    """Device enricher protocol (port) for user agent parsing.

    Behavior:
        - Fail-open: Returns empty result on errors
        - Non-blocking: Pure string parsing
    """

    def enrich(self, user_agent: str | None) -> DeviceEnrichmentResult:
        """Parse a user agent string.

        Returns:
            DeviceEnrichmentResult; all fields None when the agent is
            missing or unparseable.
        """
        ...
