"""
Asset API Endpoints.

Asset creation, replacement, soft deletion and enriched reads.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from pydantic import Field

from shared.auth import CurrentCaller
from services.asset_registry.models import (
    ActualView,
    AssetFields,
    AssetListing,
    AssetView,
    CreateOutcome,
    ForecastView,
    MutationOutcome,
)
from services.asset_registry.service import AssetRegistryService, get_registry_service


router = APIRouter(prefix="/assets", tags=["assets"])

Service = Annotated[AssetRegistryService, Depends(get_registry_service)]
AssetIndex = Annotated[int, Path(ge=0, description="Asset index")]


class AssetCreate(AssetFields):
    """Request to register a new asset."""

    replace_target: int | None = Field(
        default=None,
        ge=0,
        description="Index of an existing asset this one supersedes",
    )

    def asset_fields(self) -> AssetFields:
        return AssetFields.model_validate(self.model_dump(exclude={"replace_target"}))


@router.post(
    "/",
    response_model=CreateOutcome,
    summary="Register a new asset",
)
async def create_asset(
    asset: AssetCreate,
    caller: CurrentCaller,
    service: Service,
    response: Response,
) -> CreateOutcome:
    """
    Register a new asset.

    With `replace_target`, the superseded asset is deleted and linked to
    the new one in the same transaction.
    """
    outcome = await service.create_asset(
        caller.credential,
        asset.asset_fields(),
        replace_target=asset.replace_target,
    )
    if outcome.created:
        response.status_code = status.HTTP_201_CREATED
    return outcome


@router.get(
    "/",
    response_model=AssetListing,
    summary="List assets",
)
async def list_assets(service: Service) -> AssetListing:
    """List every asset, deleted ones included, in creation order."""
    return service.list_assets()


@router.get(
    "/{index}",
    response_model=AssetView,
    summary="Get asset by index",
)
async def get_asset(index: AssetIndex, service: Service) -> AssetView:
    """Get one asset with creator and deleter names."""
    return service.get_asset(index)


@router.delete(
    "/{index}",
    response_model=MutationOutcome,
    summary="Soft-delete asset",
)
async def delete_asset(
    index: AssetIndex,
    caller: CurrentCaller,
    service: Service,
) -> MutationOutcome:
    """Flag an asset as deleted. The record stays readable."""
    return await service.soft_delete_asset(caller.credential, index)


@router.get(
    "/{index}/forecasts",
    response_model=list[ForecastView],
    summary="Get forecast maintenance of an asset",
)
async def get_asset_forecasts(index: AssetIndex, service: Service) -> list[ForecastView]:
    """Forecast maintenance records in the order they were added."""
    return service.get_asset_forecasts(index)


@router.get(
    "/{index}/actuals",
    response_model=list[ActualView],
    summary="Get actual maintenance of an asset",
)
async def get_asset_actuals(index: AssetIndex, service: Service) -> list[ActualView]:
    """Actual maintenance records in the order they were added."""
    return service.get_asset_actuals(index)
