"""CAPTCHA verifier implementations."""

from src.infrastructure.captcha.recaptcha_verifier import (
    AllowAllCaptchaVerifier,
    RecaptchaVerifier,
)

__all__ = ["AllowAllCaptchaVerifier", "RecaptchaVerifier"]
