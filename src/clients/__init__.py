"""API client wrappers for the ERP Integration API.

Each client handles:
- Authentication
- Retries with exponential backoff
- Request timing and logging
"""

from .base import BaseAPIClient
from .erp_integration_client import ErpIntegrationClient
from .simulation import EntityUpdate, MappingSimulationResult

__all__ = [
    "BaseAPIClient",
    "ErpIntegrationClient",
    "EntityUpdate",
    "MappingSimulationResult",
]
