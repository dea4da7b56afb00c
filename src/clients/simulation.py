"""Response models for mapping simulation calls."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class EntityUpdate:
    """One entity the mapping would upsert."""

    entity_slug: str
    attributes: dict = field(default_factory=dict)
    unique_identifiers: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "EntityUpdate":
        return cls(
            entity_slug=data.get("entity_slug", ""),
            attributes=data.get("attributes") or {},
            unique_identifiers=data.get("unique_identifiers") or {},
        )

    def to_dict(self) -> dict:
        """Convert to the wire representation."""
        return {
            "entity_slug": self.entity_slug,
            "unique_identifiers": self.unique_identifiers,
            "attributes": self.attributes,
        }


@dataclass
class MappingSimulationResult:
    """Result of a simulateMappingV2 call.

    The status code is kept alongside the parsed body because the API is
    called without raising on error statuses; callers decide what a
    non-2xx response means for them.
    """

    status_code: int
    entity_updates: list[EntityUpdate] = field(default_factory=list)
    meter_readings_updates: list[dict] = field(default_factory=list)
    raw: Any = None

    @classmethod
    def from_response(cls, status_code: int, body: Any) -> "MappingSimulationResult":
        """Build a result from a status code and decoded JSON body.

        Missing or malformed lists are treated as empty.
        """
        if not isinstance(body, dict):
            logger.warning(
                "Simulation response body is not an object",
                extra={"status_code": status_code, "body_type": type(body).__name__}
            )
            return cls(status_code=status_code, raw=body)

        updates = body.get("entity_updates")
        if not isinstance(updates, list):
            updates = []
        meter_readings = body.get("meter_readings_updates")
        if not isinstance(meter_readings, list):
            meter_readings = []

        return cls(
            status_code=status_code,
            entity_updates=[
                EntityUpdate.from_dict(update)
                for update in updates
                if isinstance(update, dict)
            ],
            meter_readings_updates=[
                reading for reading in meter_readings if isinstance(reading, dict)
            ],
            raw=body,
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def find_entity_update(self, entity_slug: str) -> Optional[EntityUpdate]:
        """Return the first update for an entity slug, or None."""
        return next(
            (u for u in self.entity_updates if u.entity_slug == entity_slug),
            None,
        )

    def entity_slugs(self) -> list[str]:
        return [u.entity_slug for u in self.entity_updates]

    def to_dict(self) -> dict:
        return {
            "status_code": self.status_code,
            "entity_updates": [u.to_dict() for u in self.entity_updates],
            "meter_readings_updates": self.meter_readings_updates,
        }
