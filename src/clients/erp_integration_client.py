"""ERP Integration API client - mapping simulation over bearer auth."""

import logging
import os
from typing import Any, Optional

from src.auth.bearer import BearerTokenAuth
from src.clients.base import BaseAPIClient
from src.clients.simulation import MappingSimulationResult
from src.config import DEFAULT_API_URL, ConfigurationError, Settings

logger = logging.getLogger(__name__)

MAPPING_SIMULATION_V2_ENDPOINT = "v2/erp/updates/mapping_simulation"
SUPPORTED_FORMATS = ("json", "xml")


class ErpIntegrationClient(BaseAPIClient):
    """Client for the epilot ERP Integration API.

    Features:
    - Bearer token authentication
    - Mapping simulation (v2) without persisting data
    - Automatic retries with exponential backoff
    - Error statuses returned to the caller instead of raised
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 3,
    ):
        """Initialize ERP Integration API client.

        Args:
            base_url: API base URL (or from env: ERP_INTEGRATION_API_URL)
            api_token: epilot API token (or from env: EPILOT_API_TOKEN)
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts

        Raises:
            ConfigurationError: If no API token is available
        """
        base_url = base_url or os.getenv("ERP_INTEGRATION_API_URL") or DEFAULT_API_URL

        token = (api_token or os.getenv("EPILOT_API_TOKEN") or "").strip()
        if not token:
            raise ConfigurationError(
                "EPILOT_API_TOKEN environment variable is required. "
                "Please create a .env file with your epilot API token."
            )

        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            raise_for_status=False,
        )

        self.auth = BearerTokenAuth(token)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ErpIntegrationClient":
        """Build a client from loaded settings."""
        return cls(
            base_url=settings.api_url,
            api_token=settings.require_token(),
            timeout=settings.timeout,
            max_retries=settings.max_retries,
        )

    def get_auth_headers(self) -> dict:
        """Get bearer authorization headers."""
        return self.auth.get_auth_header()

    def simulate_mapping_v2(
        self,
        event_configuration: dict,
        payload: Any,
        format: str = "json",
    ) -> MappingSimulationResult:
        """Run a mapping configuration against a payload without persisting.

        Args:
            event_configuration: Mapping configuration for the event
            payload: Inbound ERP event (object for json, string for xml)
            format: Payload format, "json" or "xml"

        Returns:
            MappingSimulationResult with the status code and entity updates

        Raises:
            ValueError: If the format is not supported
            requests.RequestException: On connection errors and timeouts
        """
        if format not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported payload format {format!r}, "
                f"expected one of {', '.join(SUPPORTED_FORMATS)}"
            )

        body = {
            "event_configuration": event_configuration,
            "format": format,
            "payload": payload,
        }

        response = self.post(MAPPING_SIMULATION_V2_ENDPOINT, json_data=body)

        try:
            data = response.json()
        except ValueError:
            logger.warning(
                "Simulation response is not JSON",
                extra={"status_code": response.status_code}
            )
            data = response.text

        result = MappingSimulationResult.from_response(response.status_code, data)

        logger.info(
            f"Simulated mapping into {len(result.entity_updates)} entity updates",
            extra={
                "status_code": result.status_code,
                "entity_slugs": result.entity_slugs(),
                "meter_readings_count": len(result.meter_readings_updates),
            }
        )

        return result
