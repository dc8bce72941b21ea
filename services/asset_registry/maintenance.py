"""
Maintenance Ledgers
===================

Append-only ledgers of planned (forecast) and incurred (actual)
maintenance. Each record is owned by exactly one asset, which holds its
index in the matching reference list.

Batch semantics:
    Forecasts may be submitted in batches. The caller is resolved once;
    entries are then applied in order and the batch stops at the first
    entry whose asset does not exist. Entries before it stay committed,
    the failing entry and everything after it are never written.

Version: 0.1.0
"""

from collections.abc import Sequence
from typing import Generic, TypeVar

from shared.logging import get_logger

from services.asset_registry.assets import AssetRegistry
from services.asset_registry.identity import IdentityRegistry
from services.asset_registry.models import (
    NO_IDENTITY,
    ActualEntry,
    ActualRecord,
    BatchOutcome,
    ForecastEntry,
    ForecastRecord,
    MaintenanceKind,
    MutationOutcome,
    RegistryError,
)


logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=ForecastRecord)


class MaintenanceLedger(Generic[RecordT]):
    """Dense table of one kind of maintenance record, indexed globally from 0."""

    def __init__(self, kind: MaintenanceKind, record_type: type[RecordT]) -> None:
        self.kind = kind
        self.record_type = record_type
        self._records: list[RecordT] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def count(self) -> int:
        return len(self._records)

    def append(self, entry: ForecastEntry | ActualEntry, created_by: int) -> RecordT:
        """Store an entry as the next record and return it."""
        record = self.record_type(
            **entry.model_dump(),
            index=len(self._records),
            created_by=created_by,
        )
        self._records.append(record)
        return record

    def get(self, index: int) -> RecordT:
        """Get a snapshot of one record."""
        return self._records[index].model_copy(deep=True)

    def get_many(self, indices: Sequence[int]) -> list[RecordT]:
        """Get snapshots of the given records, in the order given."""
        return [self.get(i) for i in indices]


class MaintenanceRegistry:
    """
    Write path for both maintenance ledgers.

    Authorizes callers against the identity registry and keeps each
    record's owning asset in step with the ledger it was appended to.
    """

    def __init__(self, identities: IdentityRegistry, assets: AssetRegistry) -> None:
        self.identities = identities
        self.assets = assets
        self.forecasts: MaintenanceLedger[ForecastRecord] = MaintenanceLedger(
            MaintenanceKind.FORECAST, ForecastRecord
        )
        self.actuals: MaintenanceLedger[ActualRecord] = MaintenanceLedger(
            MaintenanceKind.ACTUAL, ActualRecord
        )

    def ledger(self, kind: MaintenanceKind) -> MaintenanceLedger:
        return self.forecasts if kind == MaintenanceKind.FORECAST else self.actuals

    def add_forecast_batch(
        self,
        credential: str,
        entries: Sequence[ForecastEntry],
    ) -> BatchOutcome:
        """
        Append forecast entries in order, stopping at the first unknown asset.

        Args:
            credential: Caller credential, resolved once for the whole batch
            entries: Forecast entries

        Returns:
            BatchOutcome with one result per processed entry
        """
        caller = self.identities.resolve(credential)
        if caller == NO_IDENTITY:
            logger.warning(
                "forecast_batch_rejected",
                reason=RegistryError.UNAUTHORIZED.value,
                entries=len(entries),
            )
            first = entries[0].asset_index if entries else None
            return BatchOutcome(
                results=[
                    MutationOutcome(
                        asset_found=first is not None and self.assets.exists(first),
                        caller_authorized=False,
                        success=False,
                        asset_index=first,
                        error=RegistryError.UNAUTHORIZED,
                    )
                ],
                failed_position=0,
            )

        outcome = BatchOutcome()
        for position, entry in enumerate(entries):
            if not self.assets.exists(entry.asset_index):
                outcome.results.append(
                    MutationOutcome(
                        asset_found=False,
                        caller_authorized=True,
                        success=False,
                        asset_index=entry.asset_index,
                        error=RegistryError.NOT_FOUND,
                    )
                )
                outcome.failed_position = position
                logger.warning(
                    "forecast_batch_stopped",
                    position=position,
                    asset_index=entry.asset_index,
                    committed=outcome.committed,
                    skipped=len(entries) - position,
                )
                break

            record = self._commit(MaintenanceKind.FORECAST, entry, caller)
            outcome.results.append(
                MutationOutcome(
                    asset_found=True,
                    caller_authorized=True,
                    success=True,
                    asset_index=entry.asset_index,
                    record_index=record.index,
                )
            )
            outcome.committed += 1

        logger.info(
            "forecast_batch_applied",
            created_by=caller,
            committed=outcome.committed,
            submitted=len(entries),
            failed_position=outcome.failed_position,
        )

        return outcome

    def add_actual(self, credential: str, entry: ActualEntry) -> MutationOutcome:
        """
        Append a single actual maintenance entry.

        Returns:
            MutationOutcome; UNAUTHORIZED takes precedence over NOT_FOUND
        """
        caller = self.identities.resolve(credential)
        found = self.assets.exists(entry.asset_index)

        if caller == NO_IDENTITY or not found:
            error = RegistryError.UNAUTHORIZED if caller == NO_IDENTITY else RegistryError.NOT_FOUND
            logger.warning(
                "actual_rejected",
                asset_index=entry.asset_index,
                reason=error.value,
            )
            return MutationOutcome(
                asset_found=found,
                caller_authorized=caller != NO_IDENTITY,
                success=False,
                asset_index=entry.asset_index,
                error=error,
            )

        record = self._commit(MaintenanceKind.ACTUAL, entry, caller)

        logger.info(
            "actual_added",
            record_index=record.index,
            asset_index=entry.asset_index,
            created_by=caller,
        )

        return MutationOutcome(
            asset_found=True,
            caller_authorized=True,
            success=True,
            asset_index=entry.asset_index,
            record_index=record.index,
        )

    def _commit(
        self,
        kind: MaintenanceKind,
        entry: ForecastEntry | ActualEntry,
        caller: int,
    ) -> ForecastRecord:
        record = self.ledger(kind).append(entry, created_by=caller)
        self.assets.attach(kind, entry.asset_index, record.index)
        return record
