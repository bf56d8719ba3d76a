"""CAPTCHA verifier protocol (port).

Scoring internals belong to the CAPTCHA provider. The login flow only needs a
yes/no answer for a proof token.
"""

from typing import Protocol


class CaptchaVerifierProtocol(Protocol):
    """CAPTCHA proof verification."""

    async def validate(self, proof: str, ip_address: str | None = None) -> bool:
        """Return True if the proof was issued to a human.

        Implementations return False (never raise) when the provider rejects
        the proof or cannot be reached.
        """
        ...
