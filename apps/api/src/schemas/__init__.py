"""Pydantic request/response schemas."""

from src.schemas.search import (
    QueryFilters,
    QueryInterpretation,
    SearchResultItem,
    AISearchResponse,
    DatabaseSearchResult,
    DatabaseSearchResponse,
    SearchFacet,
    FacetedSearchResponse,
)

__all__ = [
    "QueryFilters",
    "QueryInterpretation",
    "SearchResultItem",
    "AISearchResponse",
    "DatabaseSearchResult",
    "DatabaseSearchResponse",
    "SearchFacet",
    "FacetedSearchResponse",
]
