"""
Asset Registry Models
=====================

Records, inputs, outcomes and read views of the asset registry.

Reference conventions:
- Identity references are 1-based; NO_IDENTITY (0) means "nobody".
- Asset and maintenance references are 0-based and always genuine;
  an absent asset reference is None, never 0.

Version: 0.1.0
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field


NO_IDENTITY = 0


class RegistryError(str, Enum):
    """Structured failure codes reported in outcomes."""

    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    DUPLICATE_NAME = "duplicate_name"
    INVALID_NAME = "invalid_name"


class MaintenanceKind(str, Enum):
    """The two maintenance sub-ledgers."""

    FORECAST = "forecast"
    ACTUAL = "actual"


class AssetNotFoundError(LookupError):
    """Read of an asset index that was never allocated."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Asset {index} not found")
        self.index = index


# =============================================================================
# Records
# =============================================================================


class Identity(BaseModel):
    """Registered caller identity."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=1)
    credential: str
    display_name: str = Field(..., min_length=1)


class AssetFields(BaseModel):
    """Descriptive fields of a physical asset, stored verbatim."""

    asset_number: str
    area: str
    description: str = ""
    unit: str = ""
    quantity: int = Field(default=1, ge=0)
    expected_life: int = Field(default=0, ge=0, description="Expected life in years")
    purchase_price: Decimal = Field(default=Decimal("0"), ge=0)
    purchase_date: datetime.date | None = None
    warranty_end: datetime.date | None = None
    barcode: str = ""


class Asset(AssetFields):
    """Stored asset with lifecycle state and maintenance back-references."""

    index: int = Field(..., ge=0)
    forecast_refs: list[int] = Field(default_factory=list)
    actual_refs: list[int] = Field(default_factory=list)
    created_by: int = Field(..., ge=1)
    deleted_by: int = Field(default=NO_IDENTITY, ge=0)
    replaced_by: int | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_by != NO_IDENTITY

    @property
    def is_replaced(self) -> bool:
        return self.replaced_by is not None

    def descriptive_fields(self) -> AssetFields:
        """Return the descriptive fields as originally submitted."""
        return AssetFields.model_validate(
            self.model_dump(include=set(AssetFields.model_fields))
        )


class MaintenanceFields(BaseModel):
    """Fields common to forecast and actual maintenance."""

    cost: Decimal = Field(..., ge=0)
    date: datetime.date
    description: str = ""


class InvoiceFields(BaseModel):
    """Invoice detail carried by actual maintenance."""

    supplier: str = ""
    invoice_number: str = ""
    invoice_date: datetime.date | None = None


class ForecastEntry(MaintenanceFields):
    """Planned maintenance submitted against an asset."""

    asset_index: int = Field(..., ge=0)


class ActualEntry(MaintenanceFields, InvoiceFields):
    """Incurred maintenance submitted against an asset."""

    asset_index: int = Field(..., ge=0)


class ForecastRecord(MaintenanceFields):
    """Stored forecast maintenance record."""

    index: int = Field(..., ge=0)
    asset_index: int = Field(..., ge=0)
    created_by: int = Field(..., ge=1)
    deleted_by: int = Field(default=NO_IDENTITY, ge=0)


class ActualRecord(ForecastRecord, InvoiceFields):
    """Stored actual maintenance record."""


# =============================================================================
# Outcomes
# =============================================================================


class RegistrationOutcome(BaseModel):
    """Result of an identity registration."""

    registered: bool
    identity_index: int = NO_IDENTITY
    error: RegistryError | None = None

    @computed_field
    @property
    def success(self) -> bool:
        return self.registered


class CreateOutcome(BaseModel):
    """Result of an asset creation, optionally retiring a predecessor."""

    created: bool
    caller_authorized: bool
    new_index: int | None = None
    replaced_index: int | None = None
    error: RegistryError | None = None

    @computed_field
    @property
    def success(self) -> bool:
        return self.created


class MutationOutcome(BaseModel):
    """Result of a mutation targeting one existing asset."""

    asset_found: bool
    caller_authorized: bool
    success: bool
    asset_index: int | None = None
    record_index: int | None = None
    error: RegistryError | None = None


class BatchOutcome(BaseModel):
    """
    Result of a prefix-committed batch.

    `results` holds one outcome per processed entry: every committed entry
    followed, on failure, by the failing one. Entries after
    `failed_position` were not processed.
    """

    results: list[MutationOutcome] = Field(default_factory=list)
    failed_position: int | None = None
    committed: int = 0

    @computed_field
    @property
    def success(self) -> bool:
        return self.failed_position is None

    @property
    def error(self) -> RegistryError | None:
        if self.failed_position is None:
            return None
        return self.results[-1].error


# =============================================================================
# Read Views
# =============================================================================


T = TypeVar("T")


class EnrichedView(BaseModel, Generic[T]):
    """A record joined with the display names of its creator and deleter."""

    record: T
    created_name: str = ""
    deleted_name: str = ""


class AssetListing(BaseModel):
    """All assets in index order with parallel display-name columns."""

    assets: list[Asset] = Field(default_factory=list)
    created_names: list[str] = Field(default_factory=list)
    deleted_names: list[str] = Field(default_factory=list)


AssetView = EnrichedView[Asset]
ForecastView = EnrichedView[ForecastRecord]
ActualView = EnrichedView[ActualRecord]
