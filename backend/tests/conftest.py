"""
Shared pytest fixtures for the ingestion engine tests.

Provides:
- A small two-field "Person" schema used by the worked examples
- A registry containing Person plus every production schema
- Parser factories with fail-fast and accumulate configurations
"""

from datetime import date

import pytest

from ingest.pipeline.context import ParserConfig
from ingest.pipeline.engine import DataParser
from ingest.schemas.definitions import ALL_SCHEMAS
from ingest.schemas.models import RecordSchema, number, string
from ingest.schemas.registry import SchemaRegistry

PERSON = RecordSchema(
    name="Person",
    description="Minimal schema for worked examples",
    fields=(
        string("name"),
        number("age"),
    ),
)


@pytest.fixture
def person_schema() -> RecordSchema:
    return PERSON


@pytest.fixture
def test_registry() -> SchemaRegistry:
    return SchemaRegistry([PERSON, *ALL_SCHEMAS])


@pytest.fixture
def make_parser(test_registry):
    """Factory: build a DataParser with config overrides."""

    def _make(**overrides) -> DataParser:
        return DataParser(ParserConfig(**overrides), schema_registry=test_registry)

    return _make


@pytest.fixture
def parser(make_parser) -> DataParser:
    """Fail-fast parser (continue_on_error=False)."""
    return make_parser(continue_on_error=False)


@pytest.fixture
def lenient_parser(make_parser) -> DataParser:
    """Accumulating parser (continue_on_error=True)."""
    return make_parser(continue_on_error=True)


@pytest.fixture
def vehicle_record() -> dict:
    """A schema-valid Vehicle record in coerced form."""
    return {
        "vehicleId": "V-001",
        "registrationNumber": "DXB-4471",
        "make": "Toyota",
        "model": "Hiace",
        "year": 2022,
        "color": "white",
        "capacity": 12,
        "fuelType": "diesel",
        "transmission": "manual",
        "mileage": 15000,
    }


@pytest.fixture
def event_record() -> dict:
    """A schema-valid Event record in coerced form."""
    return {
        "eventId": "EV-2026-07",
        "name": "Regional Ops Summit",
        "eventType": "conference",
        "startDate": date(2026, 3, 9),
        "endDate": date(2026, 3, 11),
        "location": "Dubai World Trade Centre",
        "status": "planned",
        "attendees": ["P-001", "P-003"],
        "budget": 125000,
        "organizer": "U-17",
    }
