"""
Test Configuration
==================

Pytest fixtures for asset ledger tests.
"""

import datetime
import os
from collections.abc import AsyncGenerator, Generator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["EVENTS_MODE"] = "memory"

from shared.events import InMemoryEventPublisher, reset_event_publisher, set_event_publisher  # noqa: E402
from services.asset_registry.models import (  # noqa: E402
    ActualEntry,
    AssetFields,
    ForecastEntry,
)
from services.asset_registry.service import (  # noqa: E402
    AssetRegistryService,
    reset_registry_service,
)


ALICE = "0xA11CE00000000000000000000000000000000001"
BOB = "0xB0B0000000000000000000000000000000000002"
MALLORY = "0x4A110000000000000000000000000000000000FF"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def publisher() -> Generator[InMemoryEventPublisher, None, None]:
    """Fresh in-memory publisher installed as the global one."""
    publisher = InMemoryEventPublisher()
    set_event_publisher(publisher)
    yield publisher
    reset_event_publisher()


@pytest.fixture
def service(publisher: InMemoryEventPublisher) -> AssetRegistryService:
    """Empty registry service publishing to the test publisher."""
    return AssetRegistryService(publisher=publisher)


@pytest_asyncio.fixture
async def registered_service(service: AssetRegistryService) -> AssetRegistryService:
    """Service with Alice and Bob registered (identities 1 and 2)."""
    await service.register_identity(ALICE, "Alice")
    await service.register_identity(BOB, "Bob")
    return service


@pytest_asyncio.fixture
async def asset_registry_client(
    publisher: InMemoryEventPublisher,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the Asset Registry Service on empty tables."""
    from services.asset_registry.main import app

    reset_registry_service()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    reset_registry_service()


@pytest.fixture
def sample_asset_fields() -> AssetFields:
    """Sample asset fields for tests."""
    return AssetFields(
        asset_number="AST-0001",
        area="Plant Room B",
        description="Chilled water pump",
        unit="each",
        quantity=2,
        expected_life=15,
        purchase_price=Decimal("12500.00"),
        purchase_date=datetime.date(2021, 3, 14),
        warranty_end=datetime.date(2024, 3, 14),
        barcode="0123456789012",
    )


@pytest.fixture
def sample_asset_data() -> dict[str, object]:
    """Sample asset request body for route tests."""
    return {
        "asset_number": "AST-0001",
        "area": "Plant Room B",
        "description": "Chilled water pump",
        "unit": "each",
        "quantity": 2,
        "expected_life": 15,
        "purchase_price": "12500.00",
        "purchase_date": "2021-03-14",
        "warranty_end": "2024-03-14",
        "barcode": "0123456789012",
    }


def forecast(asset_index: int, cost: str = "250.00", description: str = "Seal replacement") -> ForecastEntry:
    """Build a forecast entry."""
    return ForecastEntry(
        asset_index=asset_index,
        cost=Decimal(cost),
        date=datetime.date(2026, 6, 1),
        description=description,
    )


def actual(asset_index: int, cost: str = "310.50", invoice_number: str = "INV-1001") -> ActualEntry:
    """Build an actual entry."""
    return ActualEntry(
        asset_index=asset_index,
        cost=Decimal(cost),
        date=datetime.date(2026, 6, 3),
        description="Seal replaced, impeller inspected",
        supplier="Pump Services Ltd",
        invoice_number=invoice_number,
        invoice_date=datetime.date(2026, 6, 10),
    )
