"""
Manual acceptance run for AI-assisted search.

Runs a fixed set of marketplace queries through interpretation and the full
ranking pipeline, logging the interpretation and the top results of each.
Also runs the database full-text search with facets for the same queries.

Run from apps/api (with DATABASE_URL and OPENAI_API_KEY or CHAT_API_BASE_URL set):
  cd apps/api && uv run python scripts/search_acceptance.py
"""
import asyncio
import logging
import sys
from pathlib import Path

_app_api = Path(__file__).resolve().parent.parent
if str(_app_api) not in sys.path:
    sys.path.insert(0, str(_app_api))

from sqlalchemy.exc import SQLAlchemyError

from src.db.session import async_session
from src.domain import ENTITY_TYPES
from src.services.search import search_with_facets
from src.services.search.ai_search import rank_candidates
from src.services.search.candidates import fetch_all
from src.services.search.interpreter import interpret_query

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_QUERIES = [
    "AI startups in healthcare",
    "blockchain partnerships with sustainable energy companies",
    "machine learning researchers at universities",
    "fintech challenges for small businesses",
    "sustainable agriculture innovation ideas",
    "Find developers who know React and TypeScript",
]

TOP_N = 5


async def run_acceptance() -> int:
    failed = 0
    async with async_session() as db:
        for query in SAMPLE_QUERIES:
            interpretation = await interpret_query(query)
            logger.info(
                "Query %r -> intent=%r type=%r entities=%s synonyms=%s filters=%s",
                query,
                interpretation.intent,
                interpretation.search_type,
                interpretation.entities,
                interpretation.synonyms,
                interpretation.filters.model_dump(exclude_none=True),
            )
            try:
                candidates = {t: await fetch_all(db, t) for t in ENTITY_TYPES}
            except SQLAlchemyError as e:
                await db.rollback()
                logger.exception("FAIL: AI search error for %r: %s", query, e)
                failed += 1
                continue
            results = rank_candidates(query, interpretation, candidates)
            if not results:
                logger.warning("EMPTY: no AI results for %r", query)
            for item in results[:TOP_N]:
                logger.info(
                    "  %-11s %6.2f  %s  (%s)",
                    item.type,
                    item.relevance_score,
                    item.title or item.name,
                    ", ".join(sorted(set(item.matched_fields))),
                )

            faceted = await search_with_facets(db, query)
            logger.info(
                "  full-text: %d results, facets=%s",
                len(faceted.results),
                [(f.type, f.count, round(f.avg_relevance, 4)) for f in faceted.facets],
            )
    return failed


def main() -> None:
    failed = asyncio.run(run_acceptance())
    logger.info("Done: %d failed of %d queries", failed, len(SAMPLE_QUERIES))
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
