import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core import get_settings, limiter, DEFAULT_DATABASE_SEARCH_LIMIT, MAX_DATABASE_SEARCH_LIMIT
from src.dependencies import get_db, get_optional_chat_provider
from src.providers import ChatProvider
from src.schemas import AISearchResponse, DatabaseSearchResponse, FacetedSearchResponse
from src.services.search import search_service
from src.services.search.database_search import DB_ERRORS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


def _ai_search_limit() -> str:
    return get_settings().ai_search_rate_limit


def _search_limit() -> str:
    return get_settings().search_rate_limit


@router.get("/ai", response_model=AISearchResponse)
@limiter.limit(_ai_search_limit)
async def ai_search(
    request: Request,
    q: str = Query(..., min_length=1, max_length=500),
    db: AsyncSession = Depends(get_db),
    chat: ChatProvider | None = Depends(get_optional_chat_provider),
):
    """LLM-interpreted search across users, challenges, partnerships and ideas."""
    try:
        results = await search_service.ai_search(db, q, chat)
    except DB_ERRORS as e:
        logger.exception("AI search failed to load candidates: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Search temporarily unavailable",
        ) from e
    return AISearchResponse(query=q, count=len(results), results=results)


@router.get("", response_model=DatabaseSearchResponse)
@limiter.limit(_search_limit)
async def database_search(
    request: Request,
    q: str = Query(..., min_length=1, max_length=500),
    limit: int = Query(DEFAULT_DATABASE_SEARCH_LIMIT, ge=1, le=MAX_DATABASE_SEARCH_LIMIT),
    db: AsyncSession = Depends(get_db),
):
    """Full-text search with ILIKE fallback; empty on database failure."""
    results = await search_service.database_search(db, q, limit)
    return DatabaseSearchResponse(query=q, count=len(results), results=results)


@router.get("/facets", response_model=FacetedSearchResponse)
@limiter.limit(_search_limit)
async def faceted_search(
    request: Request,
    q: str = Query(..., min_length=1, max_length=500),
    db: AsyncSession = Depends(get_db),
):
    return await search_service.search_with_facets(db, q)
