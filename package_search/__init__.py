"""
Package Search - read-only metadata search for a package repository snapshot.

A static snapshot of package records is loaded once and indexed in memory.
Packages can then be looked up by exact name, by what they provide, or by
the words of their name and description.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .models.package import PackageRecord
from .models.request import PackageQuery, QueryMode

__all__ = [
    "SearchEngine",
    "PackageRecord",
    "PackageQuery",
    "QueryMode",
]
