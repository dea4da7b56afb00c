"""Environment-driven settings for the ERP Integration API samples."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://erp-integration-api.sls.epilot.io"
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_RETRIES = 3


class ConfigurationError(ValueError):
    """Raised when required settings are missing or malformed."""


def _get_int(name: str, default: int) -> int:
    """Read an integer environment variable."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class Settings:
    """Runtime settings for talking to the ERP Integration API."""

    api_token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    timeout: int = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    samples_dir: Optional[str] = None

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from the environment.

        Args:
            dotenv: Load a `.env` file into the environment first

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If a numeric setting cannot be parsed
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        settings = cls(
            api_token=(os.getenv("EPILOT_API_TOKEN") or "").strip() or None,
            api_url=os.getenv("ERP_INTEGRATION_API_URL") or DEFAULT_API_URL,
            timeout=_get_int("ERP_API_TIMEOUT", DEFAULT_TIMEOUT),
            max_retries=_get_int("ERP_API_MAX_RETRIES", DEFAULT_MAX_RETRIES),
            samples_dir=os.getenv("SAMPLES_DIR") or None,
        )

        logger.debug(
            "Settings loaded",
            extra={
                "api_url": settings.api_url,
                "timeout": settings.timeout,
                "max_retries": settings.max_retries,
                "has_token": settings.api_token is not None,
            }
        )
        return settings

    def require_token(self) -> str:
        """Return the API token or fail with setup guidance."""
        token = (self.api_token or "").strip()
        if not token:
            raise ConfigurationError(
                "EPILOT_API_TOKEN environment variable is required. "
                "Please create a .env file with your epilot API token."
            )
        return token
