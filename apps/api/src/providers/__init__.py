from .chat import ChatProvider, ChatServiceError, ChatRateLimitError, get_chat_provider

__all__ = [
    "ChatProvider",
    "ChatServiceError",
    "ChatRateLimitError",
    "get_chat_provider",
]
