"""Per-record relevance scoring.

One generic scorer driven by a per-entity-type profile: which fields are scored
and with what weight, which intent keywords earn a flat bonus, and which
interpreted filters earn a flat bonus when they match the record.
"""

from dataclasses import dataclass
from typing import Any

from src.core.constants import (
    EXACT_MATCH_SCORE,
    FILTER_BONUS,
    IDEA_CATEGORY_FILTER_BONUS,
    IDEA_STAGE_FILTER_BONUS,
    INTENT_BONUS_DEFAULT,
    INTENT_BONUS_IDEA,
)
from src.schemas.search import QueryInterpretation, SearchResultItem
from .similarity import fuzzy_field_score


@dataclass(frozen=True)
class FieldRule:
    field: str
    weight: float
    # Long text: highlight a snippet of this radius around an exact match instead of the whole value
    snippet_radius: int | None = None
    # List-valued field: each item is scored (and highlighted) on its own
    multi: bool = False


@dataclass(frozen=True)
class FilterRule:
    filter_key: str
    field: str
    bonus: float


@dataclass(frozen=True)
class EntityProfile:
    entity_type: str
    fields: tuple[FieldRule, ...]
    intent_keywords: tuple[str, ...]
    intent_bonus: float
    filter_rules: tuple[FilterRule, ...]


USER_PROFILE = EntityProfile(
    entity_type="user",
    fields=(
        FieldRule("first_name", 5),
        FieldRule("last_name", 5),
        FieldRule("email", 3),
        FieldRule("organization", 4),
        FieldRule("bio", 2, snippet_radius=20),
        FieldRule("role", 4),
    ),
    intent_keywords=("people", "user", "innovator"),
    intent_bonus=INTENT_BONUS_DEFAULT,
    filter_rules=(FilterRule("role", "role", FILTER_BONUS),),
)

CHALLENGE_PROFILE = EntityProfile(
    entity_type="challenge",
    fields=(
        FieldRule("title", 5),
        FieldRule("description", 4, snippet_radius=20),
        FieldRule("organization", 3),
    ),
    intent_keywords=("challenge", "project"),
    intent_bonus=INTENT_BONUS_DEFAULT,
    filter_rules=(FilterRule("status", "status", FILTER_BONUS),),
)

PARTNERSHIP_PROFILE = EntityProfile(
    entity_type="partnership",
    fields=(
        FieldRule("title", 5),
        FieldRule("description", 4, snippet_radius=20),
        FieldRule("participants", 3, multi=True),
    ),
    intent_keywords=("partnership", "collaboration"),
    intent_bonus=INTENT_BONUS_DEFAULT,
    filter_rules=(FilterRule("status", "status", FILTER_BONUS),),
)

IDEA_PROFILE = EntityProfile(
    entity_type="idea",
    fields=(
        FieldRule("title", 6),
        FieldRule("description", 5, snippet_radius=30),
        FieldRule("category", 4),
        FieldRule("target_audience", 3),
        FieldRule("potential_impact", 4, snippet_radius=20),
        FieldRule("resources_needed", 2),
        FieldRule("participants", 3, multi=True),
    ),
    intent_keywords=("idea", "innovation", "concept"),
    intent_bonus=INTENT_BONUS_IDEA,
    filter_rules=(
        FilterRule("stage", "stage", IDEA_STAGE_FILTER_BONUS),
        FilterRule("category", "category", IDEA_CATEGORY_FILTER_BONUS),
    ),
)

ENTITY_PROFILES: dict[str, EntityProfile] = {
    p.entity_type: p
    for p in (USER_PROFILE, CHALLENGE_PROFILE, PARTNERSHIP_PROFILE, IDEA_PROFILE)
}


def build_search_terms(query: str, interpretation: QueryInterpretation) -> list[str]:
    """Original query, entities, synonyms, expanded query; blank dropped, first occurrence kept (case-insensitive)."""
    candidates = [query, *interpretation.entities, *interpretation.synonyms, interpretation.expanded_query]
    terms: list[str] = []
    seen: set[str] = set()
    for raw in candidates:
        term = (raw or "").strip()
        key = term.lower()
        if not term or key in seen:
            continue
        seen.add(key)
        terms.append(term)
    return terms


def extract_snippet(text: str, term: str, radius: int) -> str | None:
    """`...context...` around the first case-insensitive occurrence of term, or None."""
    term_lower = term.strip().lower()
    if not term_lower:
        return None
    index = text.lower().find(term_lower)
    if index == -1:
        return None
    start = max(0, index - radius)
    end = min(len(text), index + len(term_lower) + radius)
    return f"...{text[start:end]}..."


def intent_matches(intent: str, keywords: tuple[str, ...]) -> bool:
    intent_lower = (intent or "").lower()
    return any(k in intent_lower for k in keywords)


def _filter_matches(filter_value: str | None, field_value: Any) -> bool:
    if not filter_value or not field_value:
        return False
    return filter_value.lower() in str(field_value).lower()


def _display_fields(entity_type: str, record: Any) -> dict[str, str | None]:
    if entity_type == "user":
        full_name = f"{record.first_name} {record.last_name}"
        description = record.bio or f"{full_name} - {record.role} at {record.organization or 'Unknown'}"
        return {"title": None, "name": full_name, "description": description}
    return {"title": record.title, "name": None, "description": record.description}


def _score_field(
    rule: FieldRule,
    value: Any,
    term: str,
    matched_fields: list[str],
    highlights: dict[str, list[str]],
) -> float:
    if rule.multi:
        score = 0.0
        for item in value or []:
            fuzzy = fuzzy_field_score(term, item)
            if fuzzy > 0:
                score += rule.weight * fuzzy
                matched_fields.append(rule.field)
                highlights.setdefault(rule.field, []).append(item)
        return score

    if not value:
        return 0.0
    text = str(value)
    fuzzy = fuzzy_field_score(term, text)
    if fuzzy <= 0:
        return 0.0
    matched_fields.append(rule.field)
    if rule.snippet_radius is None:
        highlights[rule.field] = [text]
    elif fuzzy == EXACT_MATCH_SCORE:
        snippet = extract_snippet(text, term, rule.snippet_radius)
        if snippet:
            highlights[rule.field] = [snippet]
    return rule.weight * fuzzy


def score_record(
    entity_type: str,
    record: Any,
    terms: list[str],
    interpretation: QueryInterpretation,
) -> SearchResultItem | None:
    """Weighted field score summed over all terms, plus intent/filter bonuses.

    Returns None when no term matches any field; bonuses alone never surface a record.
    """
    profile = ENTITY_PROFILES[entity_type]
    matched_fields: list[str] = []
    highlights: dict[str, list[str]] = {}
    score = 0.0

    for term in terms:
        for rule in profile.fields:
            score += _score_field(rule, getattr(record, rule.field, None), term, matched_fields, highlights)

    if not matched_fields:
        return None
    if intent_matches(interpretation.intent, profile.intent_keywords):
        score += profile.intent_bonus
    for rule in profile.filter_rules:
        if _filter_matches(getattr(interpretation.filters, rule.filter_key), getattr(record, rule.field, None)):
            score += rule.bonus

    return SearchResultItem(
        id=str(record.id),
        type=entity_type,
        relevance_score=score,
        matched_fields=matched_fields,
        highlights=highlights,
        **_display_fields(entity_type, record),
    )
