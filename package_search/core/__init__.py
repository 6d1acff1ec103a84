"""Core indexing and query resolution."""

from .engine import SearchEngine, intersect_smallest_first
from .index import PackageIndex
from .store import DatabaseLoadError, RecordStore
from .tokenizer import Tokenizer

__all__ = [
    "SearchEngine",
    "intersect_smallest_first",
    "PackageIndex",
    "DatabaseLoadError",
    "RecordStore",
    "Tokenizer",
]
