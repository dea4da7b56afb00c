"""Run the sample mappings against the ERP Integration API and check results.

Usage:
    python -m src.run_samples
    python -m src.run_samples --event CustomerChanged
    python -m src.run_samples --output-dir out/ --log-level DEBUG
    python -m src.run_samples --validate-only
"""

import argparse
import json
import logging
import sys
import time
from contextlib import nullcontext
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import requests

from src.clients import ErpIntegrationClient
from src.config import ConfigurationError, Settings
from src.scenarios import (
    MappingScenario,
    UnknownEventError,
    event_payload_pairs,
    get_scenarios,
)
from src.transform import find_mismatches, validate_event_configuration
from src.utils import (
    RunLogger,
    SampleLoadError,
    load_event_config,
    load_inbound_event,
    setup_logging,
    timed_operation,
    write_json,
)

logger = logging.getLogger(__name__)

STATUS_PASSED = "passed"
STATUS_FAILED = "failed"
STATUS_MISSING = "missing_entity"
STATUS_ERROR = "error"


def _scenario_result(
    scenario: MappingScenario,
    status: str,
    mismatches: Optional[list] = None,
    error: Optional[str] = None,
) -> dict:
    result = {
        "scenario": scenario.id,
        "event_name": scenario.event_name,
        "payload_name": scenario.payload_name,
        "entity_slug": scenario.entity_slug,
        "description": scenario.description,
        "status": status,
    }
    if mismatches:
        result["mismatches"] = [str(m) for m in mismatches]
    if error:
        result["error"] = error
    return result


def validate_samples(
    event_names: list[str],
    samples_dir: Optional[Union[str, Path]] = None,
) -> dict:
    """Check the shape of each event's mapping configuration offline.

    Returns:
        Mapping of event name to {"valid": bool, "errors": [...]}
    """
    results = {}
    for event_name in event_names:
        try:
            config = load_event_config(event_name, samples_dir)
        except SampleLoadError as e:
            logger.error(f"Cannot load mapping for {event_name}: {e}")
            results[event_name] = {"valid": False, "errors": [str(e)]}
            continue

        validation = validate_event_configuration(config)
        results[event_name] = {
            "valid": validation.is_valid,
            "errors": validation.errors,
        }
    return results


def run_event(
    client: ErpIntegrationClient,
    event_name: str,
    payload_name: str,
    scenarios: list[MappingScenario],
    samples_dir: Optional[Union[str, Path]] = None,
    output_dir: Optional[Union[str, Path]] = None,
) -> list[dict]:
    """Simulate one event mapping and check every scenario against it.

    The simulation runs once; all scenarios for the event are checked
    against the same response.

    Returns:
        One result dict per scenario
    """
    run_logger = RunLogger(event_name)
    run_logger.start("simulate")

    try:
        config = load_event_config(event_name, samples_dir)
        payload = load_inbound_event(payload_name, samples_dir)

        with timed_operation("simulate", logger) as timer:
            simulation = client.simulate_mapping_v2(
                event_configuration=config,
                format="json",
                payload=payload,
            )
    except (SampleLoadError, ValueError, requests.RequestException) as e:
        logger.error(f"Simulation failed for {event_name}: {e}", exc_info=True)
        run_logger.error("simulate", e)
        return [_scenario_result(s, STATUS_ERROR, error=str(e)) for s in scenarios]

    run_logger.log_simulation(
        payload_name,
        simulation.status_code,
        timer.duration_ms,
        simulation.entity_slugs(),
    )

    if output_dir is not None:
        try:
            write_json(
                simulation.raw,
                Path(output_dir) / f"simulation.{event_name}.{payload_name}.json",
            )
        except OSError as e:
            logger.error(f"Cannot save response for {event_name}: {e}", exc_info=True)
            run_logger.error("write_output", e)
            return [_scenario_result(s, STATUS_ERROR, error=str(e)) for s in scenarios]

    if not simulation.ok:
        error = f"API returned status {simulation.status_code}"
        return [_scenario_result(s, STATUS_ERROR, error=error) for s in scenarios]

    results = []
    for scenario in scenarios:
        update = simulation.find_entity_update(scenario.entity_slug)
        if update is None:
            run_logger.log_assertion(scenario.entity_slug, STATUS_MISSING, 0)
            results.append(
                _scenario_result(
                    scenario,
                    STATUS_MISSING,
                    error=f"No entity update for {scenario.entity_slug!r}; "
                          f"got {simulation.entity_slugs()}",
                )
            )
            continue

        mismatches = find_mismatches(update.to_dict(), scenario.expected)
        status = STATUS_FAILED if mismatches else STATUS_PASSED
        run_logger.log_assertion(scenario.entity_slug, status, len(mismatches))
        results.append(_scenario_result(scenario, status, mismatches=mismatches))

    logger.info(f"Checked {event_name}", extra=run_logger.get_metrics())
    return results


def run_samples(
    event_name: Optional[str] = None,
    client: Optional[ErpIntegrationClient] = None,
    settings: Optional[Settings] = None,
    output_dir: Optional[Union[str, Path]] = None,
) -> dict:
    """Run all (or one event's) sample scenarios.

    Args:
        event_name: Only run scenarios for this event
        client: Client to use (built from settings if not provided)
        settings: Settings (loaded from the environment if not provided)
        output_dir: Directory to save raw simulation responses

    Returns:
        Summary with per-scenario results
    """
    settings = settings or Settings.from_env()
    scenarios = get_scenarios(event_name)

    if client is not None:
        owned = nullcontext(client)
    else:
        owned = ErpIntegrationClient.from_settings(settings)

    with owned as client:
        return _run_scenarios(client, scenarios, event_name, settings, output_dir)


def _run_scenarios(
    client: ErpIntegrationClient,
    scenarios: list[MappingScenario],
    event_name: Optional[str],
    settings: Settings,
    output_dir: Optional[Union[str, Path]],
) -> dict:
    start_time = datetime.now(timezone.utc)
    started = time.time()

    logger.info(
        "Starting sample run",
        extra={"event_name": event_name, "scenario_count": len(scenarios)}
    )

    results = []
    for pair_event, pair_payload in event_payload_pairs(scenarios):
        pair_scenarios = [
            s for s in scenarios
            if (s.event_name, s.payload_name) == (pair_event, pair_payload)
        ]
        results.extend(
            run_event(
                client,
                pair_event,
                pair_payload,
                pair_scenarios,
                samples_dir=settings.samples_dir,
                output_dir=output_dir,
            )
        )

    duration_seconds = time.time() - started
    passed = sum(1 for r in results if r["status"] == STATUS_PASSED)

    summary = {
        "status": "success" if passed == len(results) else "failure",
        "total": len(results),
        "passed": passed,
        "failed": len(results) - passed,
        "duration_seconds": round(duration_seconds, 3),
        "started_at": start_time.isoformat(),
        "request_metrics": client.metrics.to_dict(),
        "results": results,
    }

    logger.info(
        f"Sample run complete: {passed}/{len(results)} passed in {duration_seconds:.2f}s",
        extra={"passed": passed, "total": len(results)}
    )

    return summary


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Run sample ERP mappings through the mapping simulation API"
    )
    parser.add_argument(
        "--event",
        type=str,
        default=None,
        help="Only run scenarios for this event (e.g., CustomerChanged)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to save raw simulation responses",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Only check mapping configuration shape, no API calls",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, json_format=args.json_logs)

    try:
        settings = Settings.from_env()

        if args.validate_only:
            event_names = sorted({s.event_name for s in get_scenarios(args.event)})
            results = validate_samples(event_names, settings.samples_dir)
            print(json.dumps(results, indent=2, ensure_ascii=False))
            return 0 if all(r["valid"] for r in results.values()) else 1

        summary = run_samples(
            event_name=args.event,
            settings=settings,
            output_dir=args.output_dir,
        )
    except (ConfigurationError, UnknownEventError) as e:
        logger.error(str(e))
        return 2

    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0 if summary["status"] == "success" else 1


if __name__ == "__main__":
    sys.exit(main())
