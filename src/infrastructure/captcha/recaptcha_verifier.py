"""reCAPTCHA verifier (adapter).

Implements CaptchaVerifierProtocol against Google's ``siteverify`` endpoint.
A proof is accepted when the provider reports success and, for v3 tokens,
the score reaches the configured minimum.

Fail-closed: timeouts, connection errors and malformed responses reject the
proof.
"""

import httpx
import structlog

logger = structlog.get_logger(__name__)


class RecaptchaVerifier:
    """reCAPTCHA v2/v3 proof verification.

    Usage:
        verifier = RecaptchaVerifier(
            secret_key=settings.recaptcha_secret_key,
            min_score=settings.recaptcha_min_score,
        )
        if not await verifier.validate(proof, ip_address):
            ...
    """

    def __init__(
        self,
        *,
        secret_key: str,
        min_score: float = 0.5,
        verify_url: str = "https://www.google.com/recaptcha/api/siteverify",
        timeout: float = 5.0,
    ) -> None:
        self._secret_key = secret_key
        self._min_score = min_score
        self._verify_url = verify_url
        self._timeout = timeout

    async def validate(self, proof: str, ip_address: str | None = None) -> bool:
        """Verify a CAPTCHA proof token.

        Args:
            proof: Token produced by the client-side widget.
            ip_address: Client IP forwarded to the provider, if known.

        Returns:
            bool: True if the provider accepts the proof.
        """
        if not proof:
            return False

        data = {"secret": self._secret_key, "response": proof}
        if ip_address:
            data["remoteip"] = ip_address

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._verify_url, data=data)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            logger.warning("recaptcha_timeout", error=str(e))
            return False
        except httpx.HTTPError as e:
            logger.warning("recaptcha_request_failed", error=str(e))
            return False
        except ValueError as e:
            logger.warning("recaptcha_invalid_response", error=str(e))
            return False

        if not payload.get("success", False):
            logger.info(
                "recaptcha_rejected",
                error_codes=payload.get("error-codes", []),
            )
            return False

        score = payload.get("score")
        if score is not None and float(score) < self._min_score:
            logger.info("recaptcha_low_score", score=score, min_score=self._min_score)
            return False

        return True


class AllowAllCaptchaVerifier:
    """Accepts every proof. Wired only outside production when no secret is set."""

    async def validate(self, proof: str, ip_address: str | None = None) -> bool:
        return True
