"""Tests for threshold, dedup, sort and cap of scored results."""

from factories import make_item
from src.services.search.ranking import rank_results


def _keys(results) -> list[tuple[str, str]]:
    return [(r.type, r.id) for r in results]


class TestThreshold:
    def test_strictly_below_minimum_dropped(self) -> None:
        items = [make_item("user", "a", 1.0), make_item("user", "b", 1.5), make_item("user", "c", 3.0)]
        assert _keys(rank_results(items, "search")) == [("user", "c"), ("user", "b")]

    def test_raising_threshold_only_removes(self) -> None:
        items = [make_item("idea", str(i), float(i)) for i in range(1, 12)]
        low = rank_results(items, "search", min_score=2.0)
        high = rank_results(items, "search", min_score=6.0)
        assert _keys(high) == [k for k in _keys(low) if k in set(_keys(high))]
        assert set(_keys(high)) <= set(_keys(low))

    def test_empty_input(self) -> None:
        assert rank_results([], "search") == []


class TestDedup:
    def test_first_occurrence_kept(self) -> None:
        items = [make_item("challenge", "c1", 5.0), make_item("challenge", "c1", 9.0)]
        ranked = rank_results(items, "search")
        assert len(ranked) == 1
        assert ranked[0].relevance_score == 5.0

    def test_same_id_different_type_not_duplicates(self) -> None:
        items = [make_item("challenge", "x", 5.0), make_item("idea", "x", 5.0)]
        assert len(rank_results(items, "search")) == 2


class TestSort:
    def test_score_descending(self) -> None:
        items = [make_item("user", "a", 2.0), make_item("idea", "b", 8.0), make_item("challenge", "c", 4.0)]
        assert [r.relevance_score for r in rank_results(items, "search")] == [8.0, 4.0, 2.0]

    def test_people_intent_breaks_ties_by_type(self) -> None:
        items = [
            make_item("partnership", "p", 5.0),
            make_item("challenge", "c", 5.0),
            make_item("idea", "i", 5.0),
            make_item("user", "u", 5.0),
        ]
        ranked = rank_results(items, "Looking for PEOPLE in fintech")
        assert [r.type for r in ranked] == ["user", "idea", "challenge", "partnership"]

    def test_other_intents_keep_insertion_order_on_ties(self) -> None:
        items = [
            make_item("partnership", "p", 5.0),
            make_item("challenge", "c", 5.0),
            make_item("user", "u", 5.0),
        ]
        ranked = rank_results(items, "ideas about water")
        assert [r.type for r in ranked] == ["partnership", "challenge", "user"]

    def test_tie_break_never_overrides_score(self) -> None:
        items = [make_item("partnership", "p", 7.0), make_item("user", "u", 5.0)]
        assert [r.type for r in rank_results(items, "people")] == ["partnership", "user"]


class TestCap:
    def test_capped_at_fifty(self) -> None:
        items = [make_item("idea", str(i), 2.0 + i) for i in range(60)]
        ranked = rank_results(items, "search")
        assert len(ranked) == 50
        assert ranked[0].relevance_score == 61.0

    def test_never_longer_than_filtered_input(self) -> None:
        items = [make_item("idea", str(i), 2.0) for i in range(3)] + [make_item("idea", "low", 0.5)]
        assert len(rank_results(items, "search")) == 3
