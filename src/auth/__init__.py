"""Authentication for ERP Integration API access.

Supports:
- Bearer token authentication (epilot API tokens)
"""

from .bearer import BearerTokenAuth

__all__ = ["BearerTokenAuth"]
