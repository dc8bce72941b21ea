"""
Asset Registry: Assets & Maintenance History.

Append-mostly registry of physical assets and their maintenance,
gated by caller-credential authorization.

Key Features:
- Identity registry with unique display names
- Asset lifecycle: create, soft-delete, replace-chain
- Forecast and actual maintenance ledgers owned by assets
- Enriched read views joining records with identity names
"""

from services.asset_registry.assets import AssetRegistry
from services.asset_registry.identity import IdentityRegistry
from services.asset_registry.maintenance import MaintenanceLedger, MaintenanceRegistry
from services.asset_registry.queries import QueryFacade
from services.asset_registry.service import (
    AssetRegistryService,
    get_registry_service,
    reset_registry_service,
)

__all__ = [
    "AssetRegistry",
    "IdentityRegistry",
    "MaintenanceLedger",
    "MaintenanceRegistry",
    "QueryFacade",
    "AssetRegistryService",
    "get_registry_service",
    "reset_registry_service",
]
