"""LLM query interpretation with a deterministic fallback.

`request_interpretation` raises InterpretationError on any failure;
`interpret_query` never raises and substitutes QueryInterpretation.fallback(query).
One attempt per query, nothing cached.
"""

import asyncio
import json
import logging

from src.core import get_settings
from src.prompts import PROMPT_SEARCH_INTERPRETATION
from src.providers import ChatProvider, ChatServiceError, get_chat_provider
from src.schemas.search import QueryInterpretation
from src.utils import strip_json_from_response, truncate_for_log

logger = logging.getLogger(__name__)


class InterpretationError(Exception):
    """The query could not be interpreted (provider failure, timeout, or unusable output)."""


async def request_interpretation(
    chat: ChatProvider,
    query: str,
    timeout: float | None = None,
) -> QueryInterpretation:
    try:
        raw = await asyncio.wait_for(
            chat.complete(PROMPT_SEARCH_INTERPRETATION, query, json_mode=True, max_tokens=500),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        raise InterpretationError(f"Interpretation timed out after {timeout}s") from e
    except ChatServiceError as e:
        raise InterpretationError(str(e)) from e
    except Exception as e:
        # Custom providers may raise transport errors unwrapped
        raise InterpretationError(f"Chat provider failed: {e!r}") from e

    text = strip_json_from_response(raw or "")
    if not text:
        raise InterpretationError("Empty interpretation payload")
    try:
        data = json.loads(text)
    except (ValueError, json.JSONDecodeError) as e:
        raise InterpretationError("Interpretation payload is not valid JSON") from e
    if not isinstance(data, dict):
        raise InterpretationError("Interpretation payload is not a JSON object")
    return QueryInterpretation.from_llm_dict(data, query)


async def interpret_query(query: str, chat: ChatProvider | None = None) -> QueryInterpretation:
    """Interpret the query with the LLM, or fall back to a trivial interpretation."""
    timeout = get_settings().chat_timeout_seconds
    try:
        provider = chat or get_chat_provider()
        interpretation = await request_interpretation(provider, query, timeout=timeout)
    except (InterpretationError, RuntimeError) as e:
        logger.warning(
            "Query interpretation failed, using fallback | query=%s | error=%s",
            truncate_for_log(query),
            e,
        )
        return QueryInterpretation.fallback(query)
    logger.info(
        "Query interpreted | query=%s | intent=%s | entities=%d | synonyms=%d | type=%s",
        truncate_for_log(query),
        interpretation.intent,
        len(interpretation.entities),
        len(interpretation.synonyms),
        interpretation.search_type,
    )
    return interpretation
