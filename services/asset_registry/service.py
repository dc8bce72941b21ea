"""
Asset Registry Service
======================

Transaction boundary around the registry components.

Every mutation runs under one service-wide lock, so writes are applied
one at a time. The components never await, so a read interleaved on the
same event loop always sees fully committed state. Once the lock is
released the outcome, successful or not, is published as an event.

Version: 0.1.0
"""

import asyncio
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from shared.events import EventPublisher, OutcomeEventType, get_event_publisher
from shared.logging import get_logger

from services.asset_registry.assets import AssetRegistry
from services.asset_registry.identity import IdentityRegistry
from services.asset_registry.maintenance import MaintenanceRegistry
from services.asset_registry.models import (
    ActualEntry,
    ActualView,
    AssetFields,
    AssetListing,
    AssetView,
    BatchOutcome,
    CreateOutcome,
    ForecastEntry,
    ForecastView,
    MutationOutcome,
    RegistrationOutcome,
)
from services.asset_registry.queries import QueryFacade


logger = get_logger(__name__)


class AssetRegistryService:
    """
    Authorization-gated registry of assets and their maintenance history.

    Example:
        >>> service = AssetRegistryService()
        >>> await service.register_identity("0xabc", "Facilities")
        >>> outcome = await service.create_asset("0xabc", AssetFields(...))
        >>> service.get_asset(outcome.new_index).created_name
        'Facilities'
    """

    def __init__(self, publisher: EventPublisher | None = None) -> None:
        self.identities = IdentityRegistry()
        self.assets = AssetRegistry(self.identities)
        self.maintenance = MaintenanceRegistry(self.identities, self.assets)
        self.queries = QueryFacade(self.identities, self.assets, self.maintenance)

        self._publisher = publisher
        self._lock = asyncio.Lock()

    @property
    def publisher(self) -> EventPublisher:
        if self._publisher is None:
            self._publisher = get_event_publisher()
        return self._publisher

    # =========================================================================
    # Mutations
    # =========================================================================

    async def register_identity(self, credential: str, name: str) -> RegistrationOutcome:
        """Register a display name for a caller credential."""
        async with self._lock:
            outcome = self.identities.register(credential, name)
        await self._announce(
            OutcomeEventType.IDENTITY_REGISTERED,
            outcome,
            display_name=name,
        )
        return outcome

    async def create_asset(
        self,
        credential: str,
        fields: AssetFields,
        replace_target: int | None = None,
    ) -> CreateOutcome:
        """Create an asset, optionally superseding an existing one."""
        async with self._lock:
            outcome = self.assets.create(credential, fields, replace_target)
        await self._announce(
            OutcomeEventType.ASSET_CREATED,
            outcome,
            asset_number=fields.asset_number,
            replace_target=replace_target,
        )
        return outcome

    async def soft_delete_asset(self, credential: str, index: int) -> MutationOutcome:
        """Flag an asset as deleted by the caller."""
        async with self._lock:
            outcome = self.assets.soft_delete(credential, index)
        await self._announce(OutcomeEventType.ASSET_DELETED, outcome)
        return outcome

    async def add_forecast_batch(
        self,
        credential: str,
        entries: Sequence[ForecastEntry],
    ) -> BatchOutcome:
        """Append forecast maintenance with prefix-commit semantics."""
        async with self._lock:
            outcome = self.maintenance.add_forecast_batch(credential, entries)
        await self._announce(
            OutcomeEventType.FORECAST_ADDED,
            outcome,
            submitted=len(entries),
        )
        return outcome

    async def add_actual(self, credential: str, entry: ActualEntry) -> MutationOutcome:
        """Append one incurred maintenance entry."""
        async with self._lock:
            outcome = self.maintenance.add_actual(credential, entry)
        await self._announce(OutcomeEventType.ACTUAL_ADDED, outcome)
        return outcome

    # =========================================================================
    # Reads
    # =========================================================================

    def resolve(self, credential: str) -> int:
        return self.identities.resolve(credential)

    def name_of(self, index: int) -> str:
        return self.identities.name_of(index)

    def list_assets(self) -> AssetListing:
        return self.queries.list_assets()

    def get_asset(self, index: int) -> AssetView:
        return self.queries.get_asset(index)

    def get_asset_forecasts(self, index: int) -> list[ForecastView]:
        return self.queries.get_asset_forecasts(index)

    def get_asset_actuals(self, index: int) -> list[ActualView]:
        return self.queries.get_asset_actuals(index)

    def stats(self) -> dict[str, int]:
        """Get table sizes."""
        return {
            "identities": self.identities.count,
            "assets": self.assets.count,
            "forecasts": self.maintenance.forecasts.count,
            "actuals": self.maintenance.actuals.count,
        }

    async def _announce(
        self,
        event_type: OutcomeEventType,
        outcome: BaseModel,
        **context: Any,
    ) -> None:
        payload = {**context, **outcome.model_dump(mode="json")}
        await self.publisher.publish(event_type, payload)


# Global service instance
_service: AssetRegistryService | None = None


def get_registry_service() -> AssetRegistryService:
    """
    Get the process-wide registry service.

    Returns:
        AssetRegistryService shared by all routes
    """
    global _service

    if _service is None:
        _service = AssetRegistryService()
        logger.info("registry_service_initialized")

    return _service


def reset_registry_service() -> None:
    """Drop the shared service so the next call starts from empty tables."""
    global _service
    _service = None
