"""Search service facade.

Business logic is split across:
- AI-assisted search pipeline: src.services.search.ai_search
- database full-text search and facets: src.services.search.database_search
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.constants import DEFAULT_DATABASE_SEARCH_LIMIT
from src.providers import ChatProvider
from src.schemas import DatabaseSearchResult, FacetedSearchResponse, SearchResultItem
from .ai_search import run_ai_search
from .database_search import database_search, search_with_facets


class SearchService:
    """Facade for search operations."""

    @staticmethod
    async def ai_search(
        db: AsyncSession,
        query: str,
        chat: ChatProvider | None = None,
    ) -> list[SearchResultItem]:
        """Raises only when candidates cannot be loaded from the database."""
        return await run_ai_search(db, query, chat)

    @staticmethod
    async def database_search(
        db: AsyncSession,
        query: str,
        limit: int = DEFAULT_DATABASE_SEARCH_LIMIT,
    ) -> list[DatabaseSearchResult]:
        return await database_search(db, query, limit)

    @staticmethod
    async def search_with_facets(db: AsyncSession, query: str) -> FacetedSearchResponse:
        return await search_with_facets(db, query)


search_service = SearchService()
