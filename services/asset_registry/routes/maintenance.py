"""
Maintenance API Endpoints.

Forecast batches and actual maintenance entries.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from shared.auth import CurrentCaller
from shared.config import settings
from services.asset_registry.models import (
    ActualEntry,
    BatchOutcome,
    ForecastEntry,
    MutationOutcome,
)
from services.asset_registry.service import AssetRegistryService, get_registry_service


router = APIRouter(prefix="/maintenance", tags=["maintenance"])

Service = Annotated[AssetRegistryService, Depends(get_registry_service)]


class ForecastBatchRequest(BaseModel):
    """Batch of forecast entries, applied in order."""

    entries: list[ForecastEntry] = Field(
        default_factory=list,
        max_length=settings.registry.max_batch_size,
    )


@router.post(
    "/forecasts",
    response_model=BatchOutcome,
    summary="Add forecast maintenance",
)
async def add_forecasts(
    request: ForecastBatchRequest,
    caller: CurrentCaller,
    service: Service,
) -> BatchOutcome:
    """
    Append forecast entries.

    Entries are applied in order up to the first one whose asset does
    not exist; entries before it remain committed.
    """
    return await service.add_forecast_batch(caller.credential, request.entries)


@router.post(
    "/actuals",
    response_model=MutationOutcome,
    summary="Add actual maintenance",
)
async def add_actual(
    entry: ActualEntry,
    caller: CurrentCaller,
    service: Service,
) -> MutationOutcome:
    """Append one incurred maintenance entry with invoice detail."""
    return await service.add_actual(caller.credential, entry)
