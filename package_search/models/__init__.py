"""Data models for the package search service."""

from .package import PackageRecord
from .request import PackageQuery, QueryMode
from .response import (
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)

__all__ = [
    "PackageRecord",
    "PackageQuery",
    "QueryMode",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
]
