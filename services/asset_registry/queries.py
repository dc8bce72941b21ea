"""
Registry Queries
================

Read-only views joining registry records with identity display names.
Reads are public and never authorized.
"""

from services.asset_registry.assets import AssetRegistry
from services.asset_registry.identity import IdentityRegistry
from services.asset_registry.maintenance import MaintenanceRegistry
from services.asset_registry.models import (
    ActualRecord,
    ActualView,
    AssetListing,
    AssetView,
    ForecastRecord,
    ForecastView,
    MaintenanceKind,
)


class QueryFacade:
    """Enriched read views over the identity, asset and maintenance stores."""

    def __init__(
        self,
        identities: IdentityRegistry,
        assets: AssetRegistry,
        maintenance: MaintenanceRegistry,
    ) -> None:
        self.identities = identities
        self.assets = assets
        self.maintenance = maintenance

    def list_assets(self) -> AssetListing:
        """All assets in creation order with creator and deleter names."""
        assets = self.assets.get_all()
        return AssetListing(
            assets=assets,
            created_names=[self.identities.name_of(a.created_by) for a in assets],
            deleted_names=[self.identities.name_of(a.deleted_by) for a in assets],
        )

    def get_asset(self, index: int) -> AssetView:
        """One asset with creator and deleter names."""
        asset = self.assets.get(index)
        return AssetView(
            record=asset,
            created_name=self.identities.name_of(asset.created_by),
            deleted_name=self.identities.name_of(asset.deleted_by),
        )

    def get_asset_forecasts(self, index: int) -> list[ForecastView]:
        """Forecast records of one asset, in the order they were added."""
        records = self._owned(MaintenanceKind.FORECAST, index)
        return [ForecastView(**self._names(r), record=r) for r in records]

    def get_asset_actuals(self, index: int) -> list[ActualView]:
        """Actual records of one asset, in the order they were added."""
        records = self._owned(MaintenanceKind.ACTUAL, index)
        return [ActualView(**self._names(r), record=r) for r in records]

    def _owned(self, kind: MaintenanceKind, index: int) -> list:
        refs = self.assets.refs(kind, index)
        return self.maintenance.ledger(kind).get_many(refs)

    def _names(self, record: ForecastRecord | ActualRecord) -> dict[str, str]:
        return {
            "created_name": self.identities.name_of(record.created_by),
            "deleted_name": self.identities.name_of(record.deleted_by),
        }
