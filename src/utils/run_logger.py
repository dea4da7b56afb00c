"""Structured logging for sample mapping runs.

Every record carries:
- event_name
- entity_slug
- step
- status
- duration_ms
- mismatch_count
"""

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class RunLogContext:
    """Context for run logging with required fields."""

    event_name: str
    step: str = ""
    entity_slug: Optional[str] = None
    status: str = "started"
    duration_ms: Optional[float] = None
    mismatch_count: Optional[int] = None
    error: Optional[str] = None
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        data = asdict(self)
        data["timestamp"] = datetime.now(timezone.utc).isoformat()
        return {k: v for k, v in data.items() if v is not None}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class RunLogger:
    """Structured logger for one event's simulation and assertions."""

    def __init__(self, event_name: str):
        self.event_name = event_name
        self.logger = logging.getLogger(f"samples.{event_name}")
        self._start_time: Optional[float] = None
        self._simulation_times: list[float] = []
        self._checked = 0
        self._failed = 0

    def _log(self, level: int, step: str, **kwargs) -> None:
        ctx = RunLogContext(event_name=self.event_name, step=step, **kwargs)
        self.logger.log(level, ctx.to_json(), extra=ctx.to_dict())

    def start(self, step: str) -> None:
        """Log step start."""
        self._start_time = time.time()
        self._log(logging.INFO, step, status="started")

    def _elapsed_ms(self) -> Optional[float]:
        if self._start_time is None:
            return None
        return round((time.time() - self._start_time) * 1000, 2)

    def error(self, step: str, error: Exception, entity_slug: Optional[str] = None) -> None:
        """Log step error."""
        self._log(
            logging.ERROR,
            step,
            status="error",
            entity_slug=entity_slug,
            error=str(error),
            duration_ms=self._elapsed_ms(),
        )

    def log_simulation(
        self,
        payload_name: str,
        status_code: int,
        duration_ms: float,
        entity_slugs: list[str],
    ) -> None:
        """Log a mapping simulation call."""
        self._simulation_times.append(duration_ms)
        self._log(
            logging.INFO if status_code < 400 else logging.ERROR,
            step="simulate",
            status="success" if status_code < 400 else "error",
            duration_ms=round(duration_ms, 2),
            extra={
                "payload_name": payload_name,
                "status_code": status_code,
                "entity_slugs": entity_slugs,
            }
        )

    def log_assertion(self, entity_slug: str, status: str, mismatch_count: int) -> None:
        """Log the outcome of checking one entity update."""
        self._checked += 1
        if status != "passed":
            self._failed += 1
        self._log(
            logging.INFO if status == "passed" else logging.WARNING,
            step="assert",
            status=status,
            entity_slug=entity_slug,
            mismatch_count=mismatch_count,
        )

    def get_metrics(self) -> dict:
        """Get aggregated metrics."""
        return {
            "event_name": self.event_name,
            "simulations": len(self._simulation_times),
            "total_simulation_time_ms": round(sum(self._simulation_times), 2),
            "scenarios_checked": self._checked,
            "scenarios_failed": self._failed,
        }


@contextmanager
def timed_operation(name: str, logger: logging.Logger = None):
    """Context manager to time an operation.

    Usage:
        with timed_operation("simulate") as timer:
            result = client.simulate_mapping_v2(config, payload)
        print(f"Took {timer.duration_ms}ms")

    Yields:
        Timer object with duration_ms attribute
    """
    class Timer:
        def __init__(self):
            self.start_time = time.time()
            self.end_time = None
            self.duration_ms = 0

    timer = Timer()

    try:
        yield timer
    finally:
        timer.end_time = time.time()
        timer.duration_ms = (timer.end_time - timer.start_time) * 1000

        if logger:
            logger.debug(
                f"Operation '{name}' completed",
                extra={"operation": name, "duration_ms": timer.duration_ms}
            )
