"""Pytest configuration and fixtures."""

import json
import shutil
from pathlib import Path

import pytest
import requests

from src.clients import ErpIntegrationClient
from src.transform.match import AnyInstance

SAMPLES_DIR = Path(__file__).resolve().parents[1] / "samples"


def materialize(expected):
    """Turn an expected shape into a concrete value that satisfies it."""
    if isinstance(expected, AnyInstance):
        if expected.expected_type is list:
            return [{"entity_id": "7f3c1b2e-0000-4000-8000-000000000001"}]
        return expected.expected_type()
    if isinstance(expected, dict):
        return {key: materialize(value) for key, value in expected.items()}
    if isinstance(expected, list):
        return [materialize(item) for item in expected]
    return expected


def make_response(status_code: int, body) -> requests.Response:
    """Build a real requests.Response carrying a JSON body."""
    response = requests.Response()
    response.status_code = status_code
    if isinstance(body, (bytes, str)):
        response._content = body.encode("utf-8") if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    response.url = "https://erp.example.test/v2/erp/updates/mapping_simulation"
    return response


@pytest.fixture
def samples_dir():
    """The repository's shipped samples directory."""
    return SAMPLES_DIR


@pytest.fixture
def tmp_samples_dir(tmp_path):
    """A writable copy of the samples directory."""
    target = tmp_path / "samples"
    shutil.copytree(SAMPLES_DIR, target)
    return target


@pytest.fixture
def customer_payload():
    """Inbound CustomerChanged payload."""
    return json.loads((SAMPLES_DIR / "payload.customer.json").read_text(encoding="utf-8"))


@pytest.fixture
def customer_config():
    """CustomerChanged mapping configuration."""
    return json.loads(
        (SAMPLES_DIR / "mapping.CustomerChanged.json").read_text(encoding="utf-8")
    )


@pytest.fixture
def minimal_config():
    """Smallest valid mapping configuration."""
    return {
        "entities": [
            {
                "entity_schema": "contact",
                "unique_ids": ["external_id"],
                "fields": [
                    {"attribute": "external_id", "field": "customer.id"},
                    {"attribute": "status", "constant": "active"},
                ],
            }
        ]
    }


@pytest.fixture
def erp_client(monkeypatch):
    """ERP client with a fixed token and base URL."""
    monkeypatch.delenv("ERP_INTEGRATION_API_URL", raising=False)
    client = ErpIntegrationClient(
        base_url="https://erp.example.test",
        api_token="test-token",
        max_retries=0,
    )
    yield client
    client.close()


@pytest.fixture
def response_factory():
    """Factory for JSON requests.Response objects."""
    return make_response


@pytest.fixture
def passing_simulation_body():
    """Simulation body that satisfies every scenario's expected shape."""
    from src.scenarios import SCENARIOS

    def build(event_name: str) -> dict:
        return {
            "entity_updates": [
                materialize(s.expected)
                for s in SCENARIOS
                if s.event_name == event_name
            ],
            "meter_readings_updates": [],
        }

    return build
