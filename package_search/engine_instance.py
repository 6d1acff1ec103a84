"""Global search engine instance to avoid circular imports."""

from .core.engine import SearchEngine

# Global search engine instance; the application lifespan loads its snapshot
search_engine = SearchEngine()
