"""
Identity API Endpoints.

Registration of display names for caller credentials.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from shared.auth import CurrentCaller
from services.asset_registry.models import RegistrationOutcome
from services.asset_registry.service import AssetRegistryService, get_registry_service


router = APIRouter(prefix="/identities", tags=["identities"])

Service = Annotated[AssetRegistryService, Depends(get_registry_service)]


class IdentityRegisterRequest(BaseModel):
    """Request to register a display name for the calling credential."""

    name: str = Field(..., min_length=1, max_length=200)


class IdentityResolution(BaseModel):
    """Identity the calling credential resolves to."""

    identity_index: int
    display_name: str
    registered: bool


@router.post(
    "/",
    response_model=RegistrationOutcome,
    summary="Register an identity",
)
async def register_identity(
    request: IdentityRegisterRequest,
    caller: CurrentCaller,
    service: Service,
    response: Response,
) -> RegistrationOutcome:
    """
    Bind a display name to the calling credential.

    Names are unique; a taken name is reported as a `duplicate_name`
    outcome rather than an HTTP error.
    """
    outcome = await service.register_identity(caller.credential, request.name)
    if outcome.registered:
        response.status_code = status.HTTP_201_CREATED
    return outcome


@router.get(
    "/resolve",
    response_model=IdentityResolution,
    summary="Resolve the calling credential",
)
async def resolve_identity(caller: CurrentCaller, service: Service) -> IdentityResolution:
    """Report which identity, if any, the calling credential maps to."""
    index = service.resolve(caller.credential)
    return IdentityResolution(
        identity_index=index,
        display_name=service.name_of(index),
        registered=index != 0,
    )
