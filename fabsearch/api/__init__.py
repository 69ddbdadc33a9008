from fabsearch.api.health import router as health_router
from fabsearch.api.manifest import router as manifest_router

__all__ = [
    "health_router",
    "manifest_router",
]
