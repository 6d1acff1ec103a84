"""Metrics and monitoring API endpoints."""

import psutil

from fastapi import APIRouter, HTTPException

from ..models.response import MetricsResponse

router = APIRouter(prefix="/api/v1", tags=["metrics"])

# Import the global search engine instance
from ..engine_instance import search_engine


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get query counters, response times and memory usage"
)
async def get_metrics() -> MetricsResponse:
    """
    Get performance metrics for the package search service.

    Memory usage is the resident set size of this process, which is
    dominated by the in-memory package index.
    """
    try:
        stats = search_engine.get_stats()

        memory_info = psutil.Process().memory_info()
        memory_usage_mb = memory_info.rss / (1024 * 1024)  # Convert to MB

        return MetricsResponse(
            total_queries=stats["total_queries"],
            name_queries=stats["name_queries"],
            provides_queries=stats["provides_queries"],
            description_queries=stats["description_queries"],
            empty_results=stats["empty_results"],
            fallbacks=stats["fallbacks"],
            average_response_time_ms=stats["average_execution_time_ms"],
            memory_usage_mb=memory_usage_mb
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get metrics: {str(e)}"
        )
