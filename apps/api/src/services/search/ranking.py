"""Aggregation of scored results: threshold -> dedup -> sort -> cap."""

from src.core.constants import MAX_SEARCH_RESULTS, MIN_RELEVANCE_SCORE, TYPE_PREFERENCE
from src.schemas.search import SearchResultItem


def _people_oriented(intent: str) -> bool:
    return "people" in (intent or "").lower()


def rank_results(
    results: list[SearchResultItem],
    intent: str,
    min_score: float = MIN_RELEVANCE_SCORE,
    max_results: int = MAX_SEARCH_RESULTS,
) -> list[SearchResultItem]:
    """Final ranked list.

    Drops results scoring below min_score, keeps the first result per (type, id),
    sorts by score descending and caps at max_results. Ties keep insertion order,
    except for people-oriented intents where users > ideas > challenges > partnerships.
    """
    seen: set[tuple[str, str]] = set()
    kept: list[SearchResultItem] = []
    for item in results:
        if item.relevance_score < min_score:
            continue
        key = (item.type, item.id)
        if key in seen:
            continue
        seen.add(key)
        kept.append(item)

    if _people_oriented(intent):
        kept.sort(key=lambda r: (-r.relevance_score, -TYPE_PREFERENCE.get(r.type, 0)))
    else:
        kept.sort(key=lambda r: -r.relevance_score)
    return kept[:max_results]
