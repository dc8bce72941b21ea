"""
Asset Registry Service - Main Application
=========================================

FastAPI host adapter for the asset registry: supplies the caller
credential, serves the enriched read views and exposes published
outcome events.

Version: 0.1.0
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import settings
from shared.events import get_event_publisher
from shared.logging import bind_context, clear_context, get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse
from services.asset_registry.models import AssetNotFoundError
from services.asset_registry.routes import (
    assets_router,
    events_router,
    identities_router,
    maintenance_router,
)
from services.asset_registry.service import get_registry_service

# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="asset-registry",
)

logger = get_logger(__name__)

SERVICE_NAME = "asset-registry"
SERVICE_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info(
        "asset_registry_starting",
        environment=settings.environment.value,
        port=settings.ports.asset_registry,
        events_mode=settings.events.mode.value,
    )

    publisher = get_event_publisher()
    await publisher.connect()

    yield

    await publisher.disconnect()
    logger.info("asset_registry_shutting_down")


app = FastAPI(
    title="Asset Registry",
    description="Authorization-gated registry of assets and their maintenance history",
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "identities", "description": "Caller identity registration"},
        {"name": "assets", "description": "Asset lifecycle and enriched reads"},
        {"name": "maintenance", "description": "Forecast and actual maintenance ledgers"},
        {"name": "events", "description": "Published mutation outcomes"},
        {"name": "health", "description": "Service health checks"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list or ["*"],
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next: Any) -> Any:
    """Bind a request ID to every log line emitted while serving a request."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    bind_context(request_id=request_id, path=request.url.path)
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(AssetNotFoundError)
async def asset_not_found_handler(request: Request, exc: AssetNotFoundError) -> JSONResponse:
    """Map reads of unallocated asset indices to 404."""
    logger.info("asset_not_found", asset_index=exc.index)
    body = ErrorResponse(
        error=str(exc),
        error_code="not_found",
        details={"asset_index": exc.index},
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=body.model_dump(mode="json"),
    )


app.include_router(identities_router, prefix="/api/v1")
app.include_router(assets_router, prefix="/api/v1")
app.include_router(maintenance_router, prefix="/api/v1")
app.include_router(events_router, prefix="/api/v1")


@app.get("/health", tags=["health"], response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service health check endpoint."""
    publisher_health = await get_event_publisher().health_check()
    return HealthResponse(
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        components={
            "registry": {"status": "healthy", **get_registry_service().stats()},
            "events": publisher_health,
        },
    )


@app.get("/", tags=["health"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "Asset Registry",
        "description": "Authorization-gated registry of assets and their maintenance history",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.asset_registry.main:app",
        host="0.0.0.0",
        port=settings.ports.asset_registry,
        reload=settings.debug,
    )
