"""Response matching and configuration checks.

Handles:
- Partial structural matching of entity updates
- Shape validation of mapping configurations
"""

from .config_validation import (
    validate_event_configuration,
    configured_entity_slugs,
    ValidationResult,
    ValidationError,
)
from .match import (
    ANY_LIST,
    AnyInstance,
    Mismatch,
    MatchError,
    any_of,
    assert_matches,
    find_mismatches,
    matches,
)

__all__ = [
    # Matching
    "ANY_LIST",
    "AnyInstance",
    "Mismatch",
    "MatchError",
    "any_of",
    "assert_matches",
    "find_mismatches",
    "matches",
    # Configuration validation
    "validate_event_configuration",
    "configured_entity_slugs",
    "ValidationResult",
    "ValidationError",
]
