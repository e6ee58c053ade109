"""AI-assisted search pipeline.

Pipeline: interpret query (LLM, fallback on failure) -> fetch candidates per entity type
-> score each record against all search terms -> threshold/dedup/sort/cap.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.constants import MAX_SEARCH_RESULTS, MIN_RELEVANCE_SCORE
from src.domain import ENTITY_TYPES, SearchableRecord
from src.providers import ChatProvider
from src.schemas.search import QueryInterpretation, SearchResultItem
from src.utils import truncate_for_log
from .candidates import fetch_all
from .interpreter import interpret_query
from .ranking import rank_results
from .scoring import build_search_terms, score_record

logger = logging.getLogger(__name__)


def score_candidates(
    query: str,
    interpretation: QueryInterpretation,
    candidates: dict[str, list[SearchableRecord]],
) -> list[SearchResultItem]:
    """Score every candidate; unmatched records are left out. Order: users, challenges, partnerships, ideas."""
    terms = build_search_terms(query, interpretation)
    if not terms:
        return []
    results: list[SearchResultItem] = []
    for entity_type in ENTITY_TYPES:
        for record in candidates.get(entity_type) or []:
            item = score_record(entity_type, record, terms, interpretation)
            if item is not None:
                results.append(item)
    return results


def rank_candidates(
    query: str,
    interpretation: QueryInterpretation,
    candidates: dict[str, list[SearchableRecord]],
    min_score: float = MIN_RELEVANCE_SCORE,
    max_results: int = MAX_SEARCH_RESULTS,
) -> list[SearchResultItem]:
    """Pure scoring + ranking for a fixed interpretation and dataset."""
    scored = score_candidates(query, interpretation, candidates)
    return rank_results(scored, interpretation.intent, min_score=min_score, max_results=max_results)


async def run_ai_search(
    db: AsyncSession,
    query: str,
    chat: ChatProvider | None = None,
    min_score: float = MIN_RELEVANCE_SCORE,
) -> list[SearchResultItem]:
    """Ranked results for a raw query.

    Interpretation failures degrade to the fallback interpretation; database errors
    while fetching candidates propagate (nothing meaningful can be returned).
    """
    query = (query or "").strip()
    if not query:
        return []
    interpretation = await interpret_query(query, chat)

    candidates: dict[str, list[SearchableRecord]] = {}
    for entity_type in ENTITY_TYPES:
        candidates[entity_type] = await fetch_all(db, entity_type)

    ranked = rank_candidates(query, interpretation, candidates, min_score=min_score)
    logger.info(
        "AI search done | query=%s | candidates=%d | results=%d",
        truncate_for_log(query),
        sum(len(v) for v in candidates.values()),
        len(ranked),
    )
    return ranked
