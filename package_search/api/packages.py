"""Package query API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Query

from ..models.package import PackageRecord
from ..models.request import PackageQuery, QueryMode

router = APIRouter(tags=["packages"])

# Import the global search engine instance
from ..engine_instance import search_engine


@router.get(
    "/packages",
    response_model=List[PackageRecord],
    summary="Query packages",
    description=(
        "Look packages up by exact name (default), by what they provide "
        "(by=prov), or by words in their name and description (by=desc)"
    ),
)
async def query_packages(
    names: str = Query(..., min_length=1, description="Comma-separated search terms"),
    by: Optional[QueryMode] = Query(None, description="Lookup mode: 'prov' or 'desc'"),
) -> List[PackageRecord]:
    """
    Answer a package query.

    A query that matches nothing returns an empty list, not a 404.
    Provides lookups only consider the first term. Description searches
    require every term to match.
    """
    query = PackageQuery.from_params(names, by)
    return search_engine.resolve(query)
