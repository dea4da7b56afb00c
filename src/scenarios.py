"""Expected mapping outcomes for the shipped sample events.

Each scenario pairs a mapping configuration and an inbound payload with the
partial shape one entity update must have in the simulation response.
"""

from dataclasses import dataclass
from typing import Optional

from src.transform.match import ANY_LIST


class UnknownEventError(KeyError):
    """Raised when no scenario is defined for an event name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


@dataclass(frozen=True)
class MappingScenario:
    """One expected entity update for an event and payload."""

    event_name: str
    payload_name: str
    entity_slug: str
    expected: dict
    description: str = ""

    @property
    def id(self) -> str:
        return f"{self.event_name}-{self.entity_slug}"


def _relation_set() -> dict:
    return {"$relation": {"_set": ANY_LIST}}


CUSTOMER_EMAILS = [
    {"_tags": ["Primary"], "email": "max.mustermann@acme.com"},
]

CUSTOMER_PHONES = [
    {"_tags": ["Primary"], "phone": "+49 89 12345678"},
    {"_tags": ["Mobile"], "phone": "+49 176 98765432"},
]

CUSTOMER_ADDRESSES = [
    {
        "_tags": ["Primary Address"],
        "street": "Hauptstraße 123",
        "postal_code": "80331",
        "city": "Munich",
        "country": "Germany",
    },
    {
        "_tags": ["Billing Address"],
        "street": "Nebenstraße 456",
        "postal_code": "10115",
        "city": "Berlin",
        "country": "Germany",
    },
]

SEPA_PAYMENT = [
    {
        "type": "payment_sepa",
        "data": {
            "iban": "DE89370400440532013000",
            "bic_number": "DEUTDEFF",
            "fullname": "Acme Corporation",
        },
    },
]


SCENARIOS = [
    MappingScenario(
        event_name="CustomerChanged",
        payload_name="customer",
        entity_slug="contact",
        description="should map to contact entity",
        expected={
            "entity_slug": "contact",
            "attributes": {
                "external_id": "CUST-9876",
                "first_name": "Max",
                "last_name": "Mustermann",
                "company_name": "Acme Corporation",
                "customer_type": "business",
                "tax_id": "DE123456789",
                "status": "active",
                "full_name": "Acme Corporation",
                "email": CUSTOMER_EMAILS,
                "phone": CUSTOMER_PHONES,
                "address": CUSTOMER_ADDRESSES,
                "account": _relation_set(),
            },
        },
    ),
    MappingScenario(
        event_name="CustomerChanged",
        payload_name="customer",
        entity_slug="account",
        description="should map to account entity",
        expected={
            "entity_slug": "account",
            "attributes": {
                "customer_number": "CUST-9876",
                "name": "Acme Corporation",
                "tax_id": "DE123456789",
                "website": "https://www.acme-corp.example",
                "industry": ["Technology", "Solar Energy"],
                "company_size": "100-249",
                "email": CUSTOMER_EMAILS,
                "phone": CUSTOMER_PHONES,
                "address": CUSTOMER_ADDRESSES,
                "payment": SEPA_PAYMENT,
                "contacts": _relation_set(),
            },
        },
    ),
    MappingScenario(
        event_name="CustomerChanged",
        payload_name="customer",
        entity_slug="billing_account",
        description="should map to billing_account entity",
        expected={
            "entity_slug": "billing_account",
            "attributes": {
                "external_id": "CUST-9876",
                "billing_account_number": "CUST-9876",
                "billing_address": {
                    "_tags": ["Billing"],
                    "street": "Nebenstraße 456",
                    "postal_code": "10115",
                    "city": "Berlin",
                    "country": "Germany",
                },
                "payment_method": SEPA_PAYMENT,
                "billing_contact": _relation_set(),
            },
        },
    ),
    MappingScenario(
        event_name="OrderChanged",
        payload_name="order",
        entity_slug="contact",
        description="should map to contact entity",
        expected={
            "entity_slug": "contact",
            "attributes": {
                "external_id": "CUST-9876",
                "full_name": "Acme Corporation",
                "email": [
                    {"_tags": ["Primary"], "email": "contact@acme.com"},
                ],
                "phone": [
                    {"_tags": ["Primary"], "phone": "+49 89 12345678"},
                ],
            },
        },
    ),
    MappingScenario(
        event_name="OrderChanged",
        payload_name="order",
        entity_slug="order",
        description="should map to order entity",
        expected={
            "entity_slug": "order",
            "attributes": {
                "external_id": "ORD-2024-12345",
                "order_number": "ORD-2024-12345",
                "order_date": "2024-10-21T10:30:00Z",
                "status": "pending",
                "delivery_date": "2024-11-15",
                "total_amount_decimal": "3499.90",
                "total_amount": "349990",
                "total_amount_currency": "EUR",
                "item_count": 2,
                "shipping_address": [
                    {
                        "street": "Hauptstraße 123",
                        "postal_code": "80331",
                        "city": "Munich",
                        "country": "Germany",
                    },
                ],
                "order_items": [
                    {
                        "_tags": ["PROD-001"],
                        "product_id": "PROD-001",
                        "product_name": "Solar Panel 400W",
                        "quantity": "10",
                        "unit_price": "299.99",
                        "total_price": "2999.90",
                    },
                    {
                        "_tags": ["PROD-002"],
                        "product_id": "PROD-002",
                        "product_name": "Installation Service",
                        "quantity": "1",
                        "unit_price": "500.00",
                        "total_price": "500.00",
                    },
                ],
                "customer": _relation_set(),
            },
        },
    ),
]


def get_scenarios(event_name: Optional[str] = None) -> list[MappingScenario]:
    """Return scenarios, optionally only those for one event.

    Raises:
        UnknownEventError: If no scenario exists for the event
    """
    if event_name is None:
        return list(SCENARIOS)

    selected = [s for s in SCENARIOS if s.event_name == event_name]
    if not selected:
        raise UnknownEventError(f"No scenarios for event {event_name!r}")
    return selected


def event_payload_pairs(scenarios: list[MappingScenario]) -> list[tuple[str, str]]:
    """Distinct (event_name, payload_name) pairs in first-seen order."""
    seen = []
    for scenario in scenarios:
        pair = (scenario.event_name, scenario.payload_name)
        if pair not in seen:
            seen.append(pair)
    return seen
