"""File I/O utilities for sample fixtures and simulation outputs."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES_DIR = Path(__file__).resolve().parents[2] / "samples"

MAPPING_PREFIX = "mapping."
PAYLOAD_PREFIX = "payload."


class SampleLoadError(Exception):
    """Raised when a sample fixture cannot be read or parsed."""


def resolve_samples_dir(samples_dir: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the directory holding sample fixtures.

    Order: explicit argument, SAMPLES_DIR environment variable, then the
    repository's samples/ directory.
    """
    if samples_dir is not None:
        return Path(samples_dir)
    env_dir = os.getenv("SAMPLES_DIR")
    if env_dir:
        return Path(env_dir)
    return DEFAULT_SAMPLES_DIR


def read_json(file_path: Union[str, Path]) -> Any:
    """Read and parse a UTF-8 JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON value

    Raises:
        SampleLoadError: If the file is missing or not valid JSON
    """
    file_path = Path(file_path)

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SampleLoadError(f"Cannot read {file_path}: {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise SampleLoadError(f"Invalid JSON in {file_path.name}: {e}") from e

    logger.debug(f"Read JSON from {file_path}", extra={"file_path": str(file_path)})
    return data


def load_event_config(
    event_name: str,
    samples_dir: Optional[Union[str, Path]] = None,
) -> dict:
    """Load the mapping configuration for an ERP event.

    Reads samples/mapping.<event_name>.json.

    Raises:
        SampleLoadError: If the file is missing, invalid, or not an object
    """
    path = resolve_samples_dir(samples_dir) / f"{MAPPING_PREFIX}{event_name}.json"
    config = read_json(path)
    if not isinstance(config, dict):
        raise SampleLoadError(f"Mapping configuration {path.name} must be a JSON object")
    return config


def load_inbound_event(
    name: str,
    samples_dir: Optional[Union[str, Path]] = None,
) -> Any:
    """Load an inbound ERP event payload.

    Reads samples/payload.<name>.json.
    """
    path = resolve_samples_dir(samples_dir) / f"{PAYLOAD_PREFIX}{name}.json"
    return read_json(path)


def list_event_configs(samples_dir: Optional[Union[str, Path]] = None) -> list[str]:
    """List event names that have a mapping configuration."""
    directory = resolve_samples_dir(samples_dir)
    if not directory.is_dir():
        logger.warning(f"Samples directory not found: {directory}")
        return []
    return sorted(
        path.name[len(MAPPING_PREFIX):-len(".json")]
        for path in directory.glob(f"{MAPPING_PREFIX}*.json")
    )


def write_json(data: Any, output_path: Union[str, Path]) -> dict:
    """Write data as pretty-printed JSON.

    Args:
        data: JSON-serializable value
        output_path: Output file path (parent directories are created)

    Returns:
        Metadata dict with file info
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        f.write("\n")

    metadata = {
        "file_path": str(output_path),
        "file_size_bytes": output_path.stat().st_size,
    }

    logger.info(f"Wrote JSON to {output_path}", extra=metadata)
    return metadata
