"""Partial structural matching of API responses against expected shapes.

Matching rules:
- dicts: every expected key must be present and match; extra keys are ignored
- lists: same length, matched element by element
- AnyInstance: matches any value of the given type
- scalars: equality, booleans never equal numbers
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


class AnyInstance:
    """Matcher that accepts any value of a type."""

    def __init__(self, expected_type: type):
        self.expected_type = expected_type

    def matches(self, value: Any) -> bool:
        return isinstance(value, self.expected_type)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, AnyInstance):
            return self.expected_type is other.expected_type
        return self.matches(other)

    def __hash__(self) -> int:
        return hash((AnyInstance, self.expected_type))

    def __repr__(self) -> str:
        return f"Any<{self.expected_type.__name__}>"


def any_of(expected_type: type) -> AnyInstance:
    """Shorthand for AnyInstance(expected_type)."""
    return AnyInstance(expected_type)


ANY_LIST = AnyInstance(list)


@dataclass
class Mismatch:
    """A single difference between actual and expected values."""

    path: str
    reason: str
    expected: Any = None
    actual: Any = None

    def __str__(self) -> str:
        location = self.path or "<root>"
        return (
            f"{location}: {self.reason} "
            f"(expected {_short(self.expected)}, got {_short(self.actual)})"
        )


class MatchError(AssertionError):
    """Raised when a value does not match its expected shape."""

    def __init__(self, mismatches: list[Mismatch]):
        self.mismatches = mismatches
        lines = "\n".join(f"  - {m}" for m in mismatches)
        super().__init__(f"{len(mismatches)} mismatch(es):\n{lines}")


def _short(value: Any, limit: int = 80) -> str:
    if isinstance(value, AnyInstance):
        return repr(value)
    try:
        text = json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        text = repr(value)
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _scalar_equal(actual: Any, expected: Any) -> bool:
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    return actual == expected


def find_mismatches(actual: Any, expected: Any, path: str = "") -> list[Mismatch]:
    """Collect every place where actual does not match expected.

    Args:
        actual: Value received (e.g. an entity update)
        expected: Expected partial shape
        path: Path prefix used in reported mismatches

    Returns:
        List of mismatches, empty when actual matches
    """
    if isinstance(expected, AnyInstance):
        if expected.matches(actual):
            return []
        return [Mismatch(path, "wrong type", expected, actual)]

    if isinstance(expected, dict):
        if not isinstance(actual, dict):
            return [Mismatch(path, "expected an object", expected, actual)]

        mismatches = []
        for key, expected_value in expected.items():
            key_path = _join(path, str(key))
            if key not in actual:
                mismatches.append(Mismatch(key_path, "missing key", expected_value, None))
                continue
            mismatches.extend(find_mismatches(actual[key], expected_value, key_path))
        return mismatches

    if isinstance(expected, (list, tuple)):
        if not isinstance(actual, (list, tuple)):
            return [Mismatch(path, "expected an array", expected, actual)]
        if len(actual) != len(expected):
            return [
                Mismatch(
                    path,
                    f"length {len(actual)} != {len(expected)}",
                    expected,
                    actual,
                )
            ]

        mismatches = []
        for index, (actual_item, expected_item) in enumerate(zip(actual, expected)):
            mismatches.extend(
                find_mismatches(actual_item, expected_item, f"{path}[{index}]")
            )
        return mismatches

    if not _scalar_equal(actual, expected):
        return [Mismatch(path, "value differs", expected, actual)]
    return []


def matches(actual: Any, expected: Any) -> bool:
    """Return True when actual matches the expected partial shape."""
    return not find_mismatches(actual, expected)


def assert_matches(actual: Any, expected: Any) -> None:
    """Assert that actual matches the expected partial shape.

    Raises:
        MatchError: Listing every mismatch found
    """
    mismatches = find_mismatches(actual, expected)
    if mismatches:
        logger.debug(
            f"Found {len(mismatches)} mismatches",
            extra={"paths": [m.path for m in mismatches]}
        )
        raise MatchError(mismatches)
