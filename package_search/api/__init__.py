"""API endpoints for the package search service."""

from .packages import router as packages_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "packages_router",
    "health_router",
    "metrics_router",
]
