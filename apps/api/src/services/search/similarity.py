"""String similarity primitives for lexical/fuzzy scoring.

Levenshtein is O(len(a) * len(b)); free text is tokenized into words before
comparison so it only ever runs on short strings.
"""

from src.core.constants import EXACT_MATCH_SCORE, FUZZY_MATCH_THRESHOLD, FUZZY_MATCH_WEIGHT


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost for insertion, deletion and substitution."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def string_similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1]: 1.0 identical, 0.0 completely different.

    Two empty strings are identical (1.0); one empty and one non-empty string are 0.0.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(a, b)) / longest


def fuzzy_field_score(term: str, text: str | None) -> float:
    """Relevance of `term` in `text`, in [0, 1].

    1.0 for a case-insensitive substring match. Otherwise the best word-level
    similarity, scaled by FUZZY_MATCH_WEIGHT when it reaches FUZZY_MATCH_THRESHOLD, else 0.
    An empty term or text scores 0.
    """
    term_lower = (term or "").strip().lower()
    if not term_lower or not text:
        return 0.0
    text_lower = text.lower()
    if term_lower in text_lower:
        return EXACT_MATCH_SCORE
    best = max((string_similarity(term_lower, word) for word in text_lower.split()), default=0.0)
    if best >= FUZZY_MATCH_THRESHOLD:
        return best * FUZZY_MATCH_WEIGHT
    return 0.0
