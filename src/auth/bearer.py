"""Bearer token authentication handler."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class BearerTokenAuth:
    """Bearer token authentication handler.

    Places the token in the Authorization header. The token is never
    included in the repr or in log records.
    """

    def __init__(
        self,
        token: str,
        scheme: str = "Bearer",
        header_name: str = "Authorization",
    ):
        """Initialize bearer token auth.

        Args:
            token: The API token value
            scheme: Authorization scheme prefix
            header_name: Name of the header carrying the token

        Raises:
            ValueError: If the token is empty
        """
        if not token or not token.strip():
            raise ValueError("API token must not be empty")

        self._token = token.strip()
        self.scheme = scheme
        self.header_name = header_name

        logger.debug(
            "BearerTokenAuth initialized",
            extra={"header_name": header_name, "scheme": scheme}
        )

    def __repr__(self) -> str:
        return f"BearerTokenAuth(scheme={self.scheme!r}, token='***')"

    def get_auth_header(self) -> dict:
        """Get authorization header dict for requests."""
        return {self.header_name: f"{self.scheme} {self._token}"}

    def apply_auth(self, headers: Optional[dict] = None) -> dict:
        """Apply authentication to headers.

        Args:
            headers: Existing headers dict (or None)

        Returns:
            Headers dict with auth applied
        """
        headers = headers or {}
        headers.update(self.get_auth_header())
        return headers
