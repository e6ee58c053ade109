"""Normalization of LLM interpretation payloads and domain record loading."""

from src.domain import ENTITY_TYPES, ChallengeRecord, IdeaRecord, UserRecord
from src.schemas.search import QueryFilters, QueryInterpretation


class TestFromLlmDict:
    def test_snake_case_keys_accepted(self) -> None:
        interp = QueryInterpretation.from_llm_dict(
            {"expanded_query": "solar microgrids", "search_type": "Partnership"}, "solar"
        )
        assert interp.expanded_query == "solar microgrids"
        assert interp.search_type == "partnership"

    def test_missing_fields_defaulted(self) -> None:
        interp = QueryInterpretation.from_llm_dict({}, "fintech")
        assert interp.intent == "search"
        assert interp.entities == []
        assert interp.synonyms == []
        assert interp.filters == QueryFilters()
        assert interp.expanded_query == "fintech"
        assert interp.search_type == "general"

    def test_non_string_items_dropped(self) -> None:
        interp = QueryInterpretation.from_llm_dict(
            {"entities": ["ai", None, {"x": 1}, "  ", 3], "synonyms": "not a list"}, "q"
        )
        assert interp.entities == ["ai"]
        assert interp.synonyms == []

    def test_filters_keep_known_keys_only(self) -> None:
        filters = QueryFilters.from_llm_dict(
            {"role": " investor ", "stage": "pilot", "type": "user", "category": ["x"]}
        )
        assert filters == QueryFilters(role="investor", stage="pilot")

    def test_filters_not_a_dict(self) -> None:
        assert QueryFilters.from_llm_dict(["role"]) == QueryFilters()


class TestFallback:
    def test_shape(self) -> None:
        interp = QueryInterpretation.fallback("climate tech")
        assert interp.model_dump() == {
            "intent": "search",
            "entities": ["climate tech"],
            "synonyms": [],
            "filters": {"role": None, "status": None, "stage": None, "category": None},
            "expanded_query": "climate tech",
            "search_type": "general",
        }


class TestDomainRecords:
    def test_entity_types(self) -> None:
        assert ENTITY_TYPES == ("user", "challenge", "partnership", "idea")

    def test_stored_values_outside_marketplace_sets_load(self) -> None:
        user = UserRecord(id="u9", first_name="Sam", last_name="Lee", email="sam@example.org", role="ambassador")
        challenge = ChallengeRecord(id="c9", title="T", description="D", status="archived")
        idea = IdeaRecord(id="i9", title="T", description="D", stage="retired")
        assert (user.role, challenge.status, idea.stage) == ("ambassador", "archived", "retired")
