import logging
from abc import ABC, abstractmethod

import httpx

from src.core import get_settings

logger = logging.getLogger(__name__)


class ChatServiceError(Exception):
    """Raised when the chat/LLM API is unavailable or returns invalid or unexpected output."""


class ChatRateLimitError(ChatServiceError):
    """Raised when the chat/LLM API rate limits the request."""


class ChatProvider(ABC):
    """Black-box text completion: system prompt + user content in, assistant text out."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_content: str,
        *,
        json_mode: bool = False,
        max_tokens: int = 1024,
    ) -> str:
        pass


class OpenAICompatibleChatProvider(ChatProvider):
    """OpenAI-compatible endpoint (Groq, vLLM, etc.)."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None,
        model: str,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        if not self.base_url.endswith("/v1"):
            self.base_url = f"{self.base_url}/v1"
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    async def _chat(
        self,
        messages: list[dict[str, str]],
        max_tokens: int = 1024,
        temperature: float | None = None,
        response_format: dict | None = None,
    ) -> str:
        """Single POST to /chat/completions. No retries: callers own the fallback."""
        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature if temperature is not None else 0.2,
        }
        if response_format is not None:
            payload["response_format"] = response_format
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=headers,
                )
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 429:
                raise ChatRateLimitError(
                    "Chat API rate limited the request. Please retry later."
                ) from e
            body = getattr(e.response, "text", None) or ""
            if body:
                logger.warning(
                    "Chat API error %s: %s",
                    e.response.status_code,
                    body[:500],
                )
            raise ChatServiceError(
                f"Chat API returned {e.response.status_code}."
            ) from e
        except httpx.RequestError as e:
            raise ChatServiceError(
                "Chat service unavailable (timeout or connection error)."
            ) from e
        except ValueError as e:
            raise ChatServiceError("Chat API returned a non-JSON body.") from e

        try:
            choices = data.get("choices") or []
            if not choices:
                raise ChatServiceError(
                    "Chat API returned no choices (e.g. content filter)."
                )
            msg = choices[0].get("message") or {}
            content = msg.get("content")
        except (AttributeError, KeyError, TypeError, IndexError) as e:
            raise ChatServiceError("Chat API returned unexpected response format.") from e
        if content is None or not isinstance(content, str):
            raise ChatServiceError("Chat API returned missing or non-string content.")
        stripped = content.strip()
        if not stripped:
            raise ChatServiceError("Chat API returned empty content.")
        return stripped

    async def complete(
        self,
        system_prompt: str,
        user_content: str,
        *,
        json_mode: bool = False,
        max_tokens: int = 1024,
    ) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ]
        return await self._chat(
            messages,
            max_tokens=max_tokens,
            response_format={"type": "json_object"} if json_mode else None,
        )


class OpenAIChatProvider(OpenAICompatibleChatProvider):
    """Official OpenAI API."""

    def __init__(self):
        s = get_settings()
        super().__init__(
            base_url="https://api.openai.com/v1",
            api_key=s.openai_api_key,
            model=s.chat_model or _OPENAI_DEFAULT_MODEL,
            timeout=s.chat_timeout_seconds,
        )


# Default model for OpenAI official API when CHAT_MODEL is not set
_OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
# Default model for OpenAI-compatible (Groq, vLLM, etc.) when CHAT_MODEL is not set
_OPENAI_COMPATIBLE_DEFAULT_MODEL = "llama-3.1-8b-instant"


def get_chat_provider() -> ChatProvider:
    s = get_settings()
    if s.openai_api_key and not s.chat_api_base_url:
        return OpenAIChatProvider()
    if s.chat_api_base_url:
        return OpenAICompatibleChatProvider(
            base_url=s.chat_api_base_url,
            api_key=s.chat_api_key,
            model=s.chat_model or _OPENAI_COMPATIBLE_DEFAULT_MODEL,
            timeout=s.chat_timeout_seconds,
        )
    raise RuntimeError(
        "Chat LLM not configured. Set OPENAI_API_KEY or CHAT_API_BASE_URL (and CHAT_MODEL)."
    )
