from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from src.domain import EntityType


def _list(d: dict, key: str) -> list:
    v = d.get(key)
    if v is None:
        return []
    return list(v) if isinstance(v, (list, tuple)) else []


def _str_list(d: dict, key: str) -> list[str]:
    """Non-empty string items only; LLMs sometimes emit nulls or nested objects."""
    return [s.strip() for s in _list(d, key) if isinstance(s, str) and s.strip()]


def _str_or_none(v: Any) -> Optional[str]:
    if v is None or isinstance(v, (dict, list, tuple)):
        return None
    s = str(v).strip()
    return s or None


# ---------------------------------------------------------------------------
# Query interpretation (LLM output, normalized)
# ---------------------------------------------------------------------------

class QueryFilters(BaseModel):
    """Implied filters the scorer knows how to apply. Other keys from the LLM are dropped."""
    role: Optional[str] = None
    status: Optional[str] = None
    stage: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_llm_dict(cls, data: Any) -> "QueryFilters":
        if not isinstance(data, dict):
            return cls()
        return cls(
            role=_str_or_none(data.get("role")),
            status=_str_or_none(data.get("status")),
            stage=_str_or_none(data.get("stage")),
            category=_str_or_none(data.get("category")),
        )


class QueryInterpretation(BaseModel):
    intent: str = "search"
    entities: list[str] = []
    synonyms: list[str] = []
    filters: QueryFilters = QueryFilters()
    expanded_query: str = ""
    search_type: str = "general"

    @classmethod
    def fallback(cls, query: str) -> "QueryInterpretation":
        """Interpretation used whenever the LLM is unavailable or its output is unusable."""
        return cls(
            intent="search",
            entities=[query],
            synonyms=[],
            filters=QueryFilters(),
            expanded_query=query,
            search_type="general",
        )

    @classmethod
    def from_llm_dict(cls, data: dict[str, Any], query: str) -> "QueryInterpretation":
        """Normalize LLM output (camelCase keys, missing fields) to the full schema."""
        intent = _str_or_none(data.get("intent")) or "search"
        expanded = _str_or_none(data.get("expandedQuery", data.get("expanded_query"))) or query
        search_type = _str_or_none(data.get("searchType", data.get("search_type"))) or "general"
        return cls(
            intent=intent,
            entities=_str_list(data, "entities"),
            synonyms=_str_list(data, "synonyms"),
            filters=QueryFilters.from_llm_dict(data.get("filters")),
            expanded_query=expanded,
            search_type=search_type.lower(),
        )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class SearchResultItem(BaseModel):
    id: str
    type: EntityType
    title: Optional[str] = None
    name: Optional[str] = None
    description: str = ""
    relevance_score: float = 0.0
    matched_fields: list[str] = []
    highlights: dict[str, list[str]] = {}


class AISearchResponse(BaseModel):
    query: str
    count: int
    results: list[SearchResultItem] = []


class DatabaseSearchResult(BaseModel):
    id: str
    title: str = ""
    description: str = ""
    entity_type: EntityType
    relevance_score: float
    created_at: Optional[datetime] = None


class DatabaseSearchResponse(BaseModel):
    query: str
    count: int
    results: list[DatabaseSearchResult] = []


class SearchFacet(BaseModel):
    type: EntityType
    count: int
    avg_relevance: float


class FacetedSearchResponse(BaseModel):
    results: list[DatabaseSearchResult] = []
    facets: list[SearchFacet] = []
