"""Utility modules for the sample runs.

Includes:
- Logging configuration
- Structured run logging
- Fixture and output file I/O
"""

from .logging_config import setup_logging, get_logger
from .file_io import (
    SampleLoadError,
    list_event_configs,
    load_event_config,
    load_inbound_event,
    read_json,
    resolve_samples_dir,
    write_json,
)
from .run_logger import RunLogger, timed_operation

__all__ = [
    "setup_logging",
    "get_logger",
    "SampleLoadError",
    "list_event_configs",
    "load_event_config",
    "load_inbound_event",
    "read_json",
    "resolve_samples_dir",
    "write_json",
    "RunLogger",
    "timed_operation",
]
