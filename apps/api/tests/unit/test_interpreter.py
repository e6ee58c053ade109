"""Query interpretation: LLM parsing and the fallback on every failure mode."""

import asyncio
from types import SimpleNamespace

import pytest

from factories import chat_raising, chat_returning
from src.prompts import PROMPT_SEARCH_INTERPRETATION
from src.providers import ChatRateLimitError, ChatServiceError
from src.schemas.search import QueryInterpretation
from src.services.search import interpreter
from src.services.search.interpreter import (
    InterpretationError,
    interpret_query,
    request_interpretation,
)

LLM_PAYLOAD = {
    "intent": "finding people",
    "entities": ["machine learning", "universities"],
    "synonyms": ["AI", "academia"],
    "filters": {"role": "research", "type": "user"},
    "expandedQuery": "machine learning AI researchers at universities academia",
    "searchType": "user",
}


class TestRequestInterpretation:
    async def test_parses_payload(self) -> None:
        chat = chat_returning(LLM_PAYLOAD)
        interp = await request_interpretation(chat, "machine learning researchers at universities")
        assert interp.intent == "finding people"
        assert interp.entities == ["machine learning", "universities"]
        assert interp.synonyms == ["AI", "academia"]
        assert interp.filters.role == "research"
        assert interp.filters.status is None
        assert interp.expanded_query.startswith("machine learning AI")
        assert interp.search_type == "user"

    async def test_sends_fixed_system_prompt_in_json_mode(self) -> None:
        chat = chat_returning(LLM_PAYLOAD)
        await request_interpretation(chat, "ml researchers")
        args, kwargs = chat.complete.await_args
        assert args == (PROMPT_SEARCH_INTERPRETATION, "ml researchers")
        assert kwargs["json_mode"] is True
        assert chat.complete.await_count == 1

    async def test_code_fenced_json_accepted(self) -> None:
        chat = chat_returning('```json\n{"intent": "ideas", "entities": ["solar"]}\n```')
        interp = await request_interpretation(chat, "solar ideas")
        assert interp.intent == "ideas"
        assert interp.entities == ["solar"]
        assert interp.expanded_query == "solar ideas"

    @pytest.mark.parametrize("payload", ["", "not json at all", "[1, 2, 3]"])
    async def test_unusable_payload_raises(self, payload: str) -> None:
        with pytest.raises(InterpretationError):
            await request_interpretation(chat_returning(payload), "q")

    async def test_provider_error_wrapped(self) -> None:
        with pytest.raises(InterpretationError):
            await request_interpretation(chat_raising(ChatRateLimitError("429")), "q")

    async def test_timeout_wrapped(self) -> None:
        async def _slow(*args, **kwargs):
            await asyncio.sleep(1)
            return "{}"

        chat = chat_returning("{}")
        chat.complete.side_effect = _slow
        with pytest.raises(InterpretationError):
            await request_interpretation(chat, "q", timeout=0.01)


class TestInterpretQueryFallback:
    """Every failure degrades to the same fallback interpretation without raising."""

    @pytest.mark.parametrize(
        "chat",
        [
            chat_raising(ChatServiceError("down")),
            chat_raising(ConnectionError("reset by peer")),
            chat_returning(""),
            chat_returning("{broken"),
        ],
    )
    async def test_fallback(self, chat) -> None:
        interp = await interpret_query("fintech challenges", chat)
        assert interp == QueryInterpretation.fallback("fintech challenges")
        assert interp.intent == "search"
        assert interp.entities == ["fintech challenges"]
        assert interp.synonyms == []
        assert interp.expanded_query == "fintech challenges"
        assert interp.search_type == "general"

    async def test_timeout_uses_fallback(self, monkeypatch) -> None:
        async def _slow(*args, **kwargs):
            await asyncio.sleep(1)
            return "{}"

        monkeypatch.setattr(interpreter, "get_settings", lambda: SimpleNamespace(chat_timeout_seconds=0.01))
        chat = chat_returning("{}")
        chat.complete.side_effect = _slow
        assert await interpret_query("slow", chat) == QueryInterpretation.fallback("slow")

    async def test_unconfigured_provider_uses_fallback(self, monkeypatch) -> None:
        def _unconfigured():
            raise RuntimeError("Chat LLM not configured.")

        monkeypatch.setattr(interpreter, "get_chat_provider", _unconfigured)
        assert await interpret_query("ideas", None) == QueryInterpretation.fallback("ideas")

    async def test_success_passes_through(self) -> None:
        interp = await interpret_query("ml researchers", chat_returning(LLM_PAYLOAD))
        assert interp.intent == "finding people"
