"""Asset registry API routes."""

from services.asset_registry.routes.identities import router as identities_router
from services.asset_registry.routes.assets import router as assets_router
from services.asset_registry.routes.maintenance import router as maintenance_router
from services.asset_registry.routes.events import router as events_router

__all__ = [
    "identities_router",
    "assets_router",
    "maintenance_router",
    "events_router",
]
