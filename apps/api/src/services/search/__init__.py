"""AI-assisted search, database full-text search, and facets."""

from .search import search_service
from .ai_search import run_ai_search
from .database_search import database_search, search_with_facets

__all__ = ["search_service", "run_ai_search", "database_search", "search_with_facets"]
