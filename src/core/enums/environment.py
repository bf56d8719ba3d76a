"""Runtime environments.

Used by Settings to decide environment-specific behavior (secret key
generation, CAPTCHA bypass, log rendering).
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
