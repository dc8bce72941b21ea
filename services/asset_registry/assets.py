"""
Asset Registry
==============

Owns asset records, their soft-delete and replacement state, and the
back-references into the maintenance ledgers.

Assets are never removed. Deleting an asset stamps the deleting identity
on it; replacing an asset deletes it and points it at its successor.
Every write is authorized by resolving the caller credential first and
either completes in full or leaves the registry untouched.

Version: 0.1.0
"""

from shared.logging import get_logger

from services.asset_registry.identity import IdentityRegistry
from services.asset_registry.models import (
    NO_IDENTITY,
    Asset,
    AssetFields,
    AssetNotFoundError,
    CreateOutcome,
    MaintenanceKind,
    MutationOutcome,
    RegistryError,
)


logger = get_logger(__name__)


class AssetRegistry:
    """Dense, append-only table of assets."""

    def __init__(self, identities: IdentityRegistry) -> None:
        self.identities = identities
        self._assets: list[Asset] = []

    def __len__(self) -> int:
        return len(self._assets)

    @property
    def count(self) -> int:
        """Number of assets ever created, deleted ones included."""
        return len(self._assets)

    def exists(self, index: int) -> bool:
        """Check whether an asset index has been allocated."""
        return 0 <= index < len(self._assets)

    # =========================================================================
    # Mutations
    # =========================================================================

    def create(
        self,
        credential: str,
        fields: AssetFields,
        replace_target: int | None = None,
    ) -> CreateOutcome:
        """
        Create an asset, optionally retiring the asset it replaces.

        Args:
            credential: Caller credential
            fields: Descriptive asset fields, stored verbatim
            replace_target: Index of an existing asset superseded by this one

        Returns:
            CreateOutcome with the new index. On UNAUTHORIZED or an unknown
            replace target nothing is written.
        """
        caller = self.identities.resolve(credential)
        if caller == NO_IDENTITY:
            logger.warning("asset_create_rejected", reason=RegistryError.UNAUTHORIZED.value)
            return CreateOutcome(
                created=False,
                caller_authorized=False,
                error=RegistryError.UNAUTHORIZED,
            )

        if replace_target is not None and not self.exists(replace_target):
            logger.warning(
                "asset_create_rejected",
                reason=RegistryError.NOT_FOUND.value,
                replace_target=replace_target,
            )
            return CreateOutcome(
                created=False,
                caller_authorized=True,
                error=RegistryError.NOT_FOUND,
            )

        index = len(self._assets)
        self._assets.append(
            Asset(
                **fields.model_dump(),
                index=index,
                created_by=caller,
            )
        )

        if replace_target is not None:
            retired = self._assets[replace_target]
            retired.replaced_by = index
            retired.deleted_by = caller

        logger.info(
            "asset_created",
            asset_index=index,
            asset_number=fields.asset_number,
            created_by=caller,
            replaced_index=replace_target,
        )

        return CreateOutcome(
            created=True,
            caller_authorized=True,
            new_index=index,
            replaced_index=replace_target,
        )

    def soft_delete(self, credential: str, index: int) -> MutationOutcome:
        """
        Mark an asset deleted by the caller.

        Any registered identity may delete any asset, and deleting an
        already deleted asset overwrites the deleter.

        Args:
            credential: Caller credential
            index: Asset index

        Returns:
            MutationOutcome; UNAUTHORIZED takes precedence over NOT_FOUND
        """
        caller = self.identities.resolve(credential)
        found = self.exists(index)

        if caller == NO_IDENTITY:
            error = RegistryError.UNAUTHORIZED
        elif not found:
            error = RegistryError.NOT_FOUND
        else:
            error = None

        if error is not None:
            logger.warning("asset_delete_rejected", asset_index=index, reason=error.value)
            return MutationOutcome(
                asset_found=found,
                caller_authorized=caller != NO_IDENTITY,
                success=False,
                asset_index=index,
                error=error,
            )

        asset = self._assets[index]
        previous = asset.deleted_by
        asset.deleted_by = caller

        logger.info(
            "asset_deleted",
            asset_index=index,
            deleted_by=caller,
            previously_deleted_by=previous or None,
        )

        return MutationOutcome(
            asset_found=True,
            caller_authorized=True,
            success=True,
            asset_index=index,
        )

    def attach(self, kind: MaintenanceKind, index: int, record_index: int) -> None:
        """
        Append a maintenance record reference to an asset.

        Callers authorize and range-check before attaching.
        """
        asset = self._assets[index]
        if kind == MaintenanceKind.FORECAST:
            asset.forecast_refs.append(record_index)
        else:
            asset.actual_refs.append(record_index)

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, index: int) -> Asset:
        """
        Get a snapshot of one asset.

        Raises:
            AssetNotFoundError: If the index was never allocated
        """
        if not self.exists(index):
            raise AssetNotFoundError(index)
        return self._assets[index].model_copy(deep=True)

    def get_all(self) -> list[Asset]:
        """Get snapshots of every asset in index order."""
        return [asset.model_copy(deep=True) for asset in self._assets]

    def refs(self, kind: MaintenanceKind, index: int) -> list[int]:
        """Get the maintenance references of one asset in insertion order."""
        if not self.exists(index):
            raise AssetNotFoundError(index)
        asset = self._assets[index]
        refs = asset.forecast_refs if kind == MaintenanceKind.FORECAST else asset.actual_refs
        return list(refs)
