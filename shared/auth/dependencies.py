"""
FastAPI Caller Dependencies
===========================

The host environment identifies "who invoked this" with an opaque
credential (wallet address, service principal, ...). This module lifts
that credential from the request so route handlers can hand it to the
registry, which performs the actual identity resolution.

Version: 0.1.0
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from shared.config import settings
from shared.logging import get_logger


logger = get_logger(__name__)


class Caller(BaseModel):
    """Caller of a registry operation as reported by the host."""

    credential: str = Field(..., min_length=1, description="Opaque caller credential")


async def get_caller(request: Request) -> Caller:
    """
    Extract the caller credential from the configured request header.

    Args:
        request: Incoming request

    Returns:
        Caller: Caller carrying the raw credential

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    header = settings.registry.caller_header
    credential = request.headers.get(header, "")

    # Credentials are opaque and passed on verbatim; only all-blank is missing
    if not credential.strip():
        logger.warning("caller_credential_missing", header=header)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing caller credential header '{header}'",
        )

    return Caller(credential=credential)


CurrentCaller = Annotated[Caller, Depends(get_caller)]
