"""Health check and monitoring API endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from ..models.response import HealthResponse
from ..config import current_settings

router = APIRouter(prefix="/api/v1", tags=["health"])

# Import the global search engine instance
from ..engine_instance import search_engine

# Track application start time
app_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the package search service"
)
async def health_check(request: Request) -> HealthResponse:
    """
    Perform a health check on the package search service.

    The service is degraded until the package database has been loaded.
    """
    try:
        settings = current_settings(request.app)
        uptime = time.time() - app_start_time

        dependencies = {
            "package_database": "healthy" if search_engine.is_loaded else "degraded",
        }

        # Determine overall status
        if all(status == "healthy" for status in dependencies.values()):
            status = "healthy"
        elif any(status == "unhealthy" for status in dependencies.values()):
            status = "unhealthy"
        else:
            status = "degraded"

        return HealthResponse(
            status=status,
            version=settings.app_version,
            uptime=uptime,
            total_packages=len(search_engine.index),
            dependencies=dependencies
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Health check failed: {str(e)}"
        )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the service is ready to accept requests"
)
async def readiness_check() -> JSONResponse:
    """
    Check if the service is ready to accept requests.

    Ready once the package database is loaded and indexed.
    """
    if not search_engine.is_loaded:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "error": "Package database not loaded",
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    return JSONResponse(
        status_code=200,
        content={
            "status": "ready",
            "timestamp": datetime.utcnow().isoformat(),
            "index_stats": search_engine.index.get_stats()
        }
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    """Check if the service process is alive and responding."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": datetime.utcnow().isoformat(),
            "uptime": time.time() - app_start_time
        }
    )


@router.get(
    "/status",
    summary="Service status",
    description="Get detailed status information about the service"
)
async def service_status(request: Request) -> JSONResponse:
    """
    Get detailed status information about the service.

    Includes query statistics, index statistics and the non-secret parts
    of the configuration.
    """
    try:
        settings = current_settings(request.app)
        stats = search_engine.get_stats()

        config_info = {
            "db_file": str(settings.db_file),
            "tls_enabled": settings.tls_enabled,
            "localhost": settings.localhost,
            "debug": settings.debug
        }

        return JSONResponse(
            status_code=200,
            content={
                "service": {
                    "name": settings.app_name,
                    "version": settings.app_version,
                    "status": "running",
                    "uptime": time.time() - app_start_time,
                    "start_time": datetime.fromtimestamp(app_start_time).isoformat()
                },
                "configuration": config_info,
                "statistics": stats,
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get service status: {str(e)}"
        )
