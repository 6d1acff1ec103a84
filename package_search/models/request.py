"""Request models for API endpoints."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class QueryMode(str, Enum):
    """How the terms of a package query are matched."""

    NAME = "name"
    PROVIDES = "prov"
    DESCRIPTION = "desc"


class PackageQuery(BaseModel):
    """A parsed package query: the search terms plus the lookup mode."""

    terms: List[str] = Field(..., min_length=1, description="Search terms, in request order")
    mode: QueryMode = Field(default=QueryMode.NAME, description="Lookup mode")

    @classmethod
    def from_params(cls, names: str, by: Optional[QueryMode] = None) -> "PackageQuery":
        """
        Build a query from the raw ``names`` and ``by`` query-string values.

        Args:
            names: Comma-separated search terms
            by: Optional lookup mode; exact-name lookup when absent

        Returns:
            The parsed query
        """
        return cls(terms=names.split(","), mode=by or QueryMode.NAME)
