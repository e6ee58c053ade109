"""
Database full-text search over the v_searchable_content view.

Primary path ranks to_tsquery matches with ts_rank. If that fails (e.g. the query
does not parse as a tsquery) a degraded ILIKE match on title/description runs with
a flat relevance of 1.0. If both fail the result is empty; nothing is raised.
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.constants import DEFAULT_DATABASE_SEARCH_LIMIT, FALLBACK_RELEVANCE_SCORE
from src.domain import ENTITY_TYPES
from src.schemas.search import DatabaseSearchResult, FacetedSearchResponse, SearchFacet
from src.utils import truncate_for_log

logger = logging.getLogger(__name__)

# Connection failures can surface from the driver before SQLAlchemy wraps them
DB_ERRORS = (SQLAlchemyError, OSError)

_FTS_SQL = text("""
    SELECT entity_type, id, title, description,
           ts_rank(search_vector, to_tsquery('english', :q)) AS relevance_score,
           created_at
    FROM v_searchable_content
    WHERE search_vector @@ to_tsquery('english', :q)
    ORDER BY relevance_score DESC, created_at DESC
    LIMIT :limit
""")

_ILIKE_SQL = text("""
    SELECT entity_type, id, title, description, created_at
    FROM v_searchable_content
    WHERE title ILIKE :pattern ESCAPE '\\' OR description ILIKE :pattern ESCAPE '\\'
    ORDER BY created_at DESC
    LIMIT :limit
""")

_FACETS_SQL = text("""
    SELECT entity_type,
           COUNT(*) AS result_count,
           AVG(ts_rank(search_vector, to_tsquery('english', :q))) AS avg_relevance
    FROM v_searchable_content
    WHERE search_vector @@ to_tsquery('english', :q)
    GROUP BY entity_type
    ORDER BY avg_relevance DESC
""")


def to_tsquery_text(query: str) -> str:
    """Whitespace-separated tokens joined with the tsquery AND operator."""
    return " & ".join((query or "").split())


def to_ilike_pattern(query: str) -> str:
    """Case-insensitive contains pattern with LIKE wildcards escaped."""
    escaped = query.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _known_rows(rows) -> list:
    """Rows whose entity_type is one of the searchable types; others are logged and skipped."""
    known = []
    for row in rows:
        if row.entity_type in ENTITY_TYPES:
            known.append(row)
        else:
            logger.warning("Skipping search row with unknown entity_type=%s", row.entity_type)
    return known


def _row_to_result(row, relevance: float) -> DatabaseSearchResult:
    return DatabaseSearchResult(
        id=str(row.id),
        title=row.title or "",
        description=row.description or "",
        entity_type=row.entity_type,
        relevance_score=relevance,
        created_at=row.created_at,
    )


async def _rollback_quietly(db: AsyncSession) -> None:
    """Clear an aborted transaction so the next statement can run."""
    try:
        await db.rollback()
    except DB_ERRORS as e:
        logger.warning("Rollback after search failure also failed: %s", e)


async def _fallback_search(db: AsyncSession, query: str, limit: int) -> list[DatabaseSearchResult]:
    try:
        r = await db.execute(_ILIKE_SQL, {"pattern": to_ilike_pattern(query), "limit": limit})
        rows = r.all()
    except DB_ERRORS as e:
        logger.error("Fallback search failed | query=%s | error=%s", truncate_for_log(query), e)
        await _rollback_quietly(db)
        return []
    return [_row_to_result(row, FALLBACK_RELEVANCE_SCORE) for row in _known_rows(rows)]


async def database_search(
    db: AsyncSession,
    query: str,
    limit: int = DEFAULT_DATABASE_SEARCH_LIMIT,
) -> list[DatabaseSearchResult]:
    """Full-text search ranked by ts_rank, then recency. Never raises."""
    if not query or not query.strip():
        return []
    limit = max(1, limit)
    try:
        r = await db.execute(_FTS_SQL, {"q": to_tsquery_text(query), "limit": limit})
        rows = r.all()
    except DB_ERRORS as e:
        logger.warning(
            "Full-text search failed, using ILIKE fallback | query=%s | error=%s",
            truncate_for_log(query),
            e,
        )
        await _rollback_quietly(db)
        return await _fallback_search(db, query, limit)
    return [_row_to_result(row, float(row.relevance_score or 0.0)) for row in _known_rows(rows)]


async def search_with_facets(db: AsyncSession, query: str) -> FacetedSearchResponse:
    """Ranked results plus per-entity-type counts and average relevance. Never raises."""
    if not query or not query.strip():
        return FacetedSearchResponse()
    try:
        r = await db.execute(_FACETS_SQL, {"q": to_tsquery_text(query)})
        facet_rows = r.all()
    except DB_ERRORS as e:
        logger.error("Faceted search failed | query=%s | error=%s", truncate_for_log(query), e)
        await _rollback_quietly(db)
        return FacetedSearchResponse()
    facets = [
        SearchFacet(
            type=row.entity_type,
            count=int(row.result_count),
            avg_relevance=float(row.avg_relevance or 0.0),
        )
        for row in _known_rows(facet_rows)
    ]
    results = await database_search(db, query)
    return FacetedSearchResponse(results=results, facets=facets)
