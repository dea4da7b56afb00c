"""Shape checks for mapping event configurations.

These checks run locally before a configuration is sent for simulation.
They never evaluate JSONata expressions; the service does that.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

logger = logging.getLogger(__name__)

FIELD_SOURCES = ("field", "jsonataExpression", "constant", "relations")
RELATION_OPERATIONS = ("_set", "_append", "_append_all")


@dataclass
class ValidationResult:
    """Result of configuration validation."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    config: Optional[dict] = None


class ValidationError(Exception):
    """Raised when validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Validation failed: {errors}")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_relations(relations: Any, location: str) -> list[str]:
    """Validate the relations block of a field mapping."""
    if not isinstance(relations, dict):
        return [f"{location}.relations: must be an object"]

    errors = []
    operation = relations.get("operation")
    if operation not in RELATION_OPERATIONS:
        errors.append(
            f"{location}.relations.operation: must be one of "
            f"{', '.join(RELATION_OPERATIONS)}, got {operation!r}"
        )

    items = relations.get("items")
    if not isinstance(items, list) or not items:
        errors.append(f"{location}.relations.items: must be a non-empty list")
        return errors

    for index, item in enumerate(items):
        item_location = f"{location}.relations.items[{index}]"
        if not isinstance(item, dict):
            errors.append(f"{item_location}: must be an object")
            continue
        if _is_blank(item.get("entity_schema")):
            errors.append(f"{item_location}.entity_schema: required")
        unique_ids = item.get("unique_ids")
        if not isinstance(unique_ids, list) or not unique_ids:
            errors.append(f"{item_location}.unique_ids: must be a non-empty list")

    return errors


def validate_field_mapping(mapping: Any, location: str) -> list[str]:
    """Validate a single field mapping.

    A field needs an attribute and exactly one value source.
    """
    if not isinstance(mapping, dict):
        return [f"{location}: must be an object"]

    errors = []
    if _is_blank(mapping.get("attribute")):
        errors.append(f"{location}.attribute: required")

    sources = [name for name in FIELD_SOURCES if name in mapping]
    if not sources:
        errors.append(
            f"{location}: needs one of {', '.join(FIELD_SOURCES)}"
        )
    elif len(sources) > 1:
        errors.append(
            f"{location}: has multiple sources ({', '.join(sources)})"
        )

    if "relations" in mapping:
        errors.extend(validate_relations(mapping["relations"], location))

    return errors


def validate_entity(entity: Any, location: str) -> list[str]:
    """Validate one entity block of a configuration."""
    if not isinstance(entity, dict):
        return [f"{location}: must be an object"]

    errors = []
    if _is_blank(entity.get("entity_schema")):
        errors.append(f"{location}.entity_schema: required")

    unique_ids = entity.get("unique_ids")
    if not isinstance(unique_ids, list) or not unique_ids:
        errors.append(f"{location}.unique_ids: must be a non-empty list")

    fields = entity.get("fields")
    if not isinstance(fields, list):
        errors.append(f"{location}.fields: must be a list")
        return errors

    for index, mapping in enumerate(fields):
        errors.extend(validate_field_mapping(mapping, f"{location}.fields[{index}]"))

    return errors


def validate_event_configuration(
    config: Any,
    raise_on_error: bool = False,
) -> ValidationResult:
    """Validate a mapping event configuration.

    Args:
        config: Parsed configuration (mapping.<Event>.json)
        raise_on_error: If True, raise exception when validation fails

    Returns:
        ValidationResult with is_valid flag and any errors

    Raises:
        ValidationError: If raise_on_error=True and validation fails
    """
    errors = []

    if not isinstance(config, dict):
        errors.append("configuration: must be an object")
    else:
        entities = config.get("entities")
        if not isinstance(entities, list) or not entities:
            errors.append("entities: must be a non-empty list")
        else:
            for index, entity in enumerate(entities):
                errors.extend(validate_entity(entity, f"entities[{index}]"))

    result = ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        config=config if len(errors) == 0 else None,
    )

    if errors:
        logger.warning(
            f"Configuration has {len(errors)} problems",
            extra={"errors": errors}
        )
        if raise_on_error:
            raise ValidationError(errors)

    return result


def configured_entity_slugs(config: dict) -> list[str]:
    """List the entity schemas a configuration maps into."""
    return [
        entity.get("entity_schema")
        for entity in config.get("entities", [])
        if isinstance(entity, dict)
    ]
