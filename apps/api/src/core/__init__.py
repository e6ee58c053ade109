"""Core configuration, constants, and shared infrastructure."""

from src.core.config import Settings, get_settings
from src.core.constants import (
    MAX_SEARCH_RESULTS,
    MIN_RELEVANCE_SCORE,
    DEFAULT_DATABASE_SEARCH_LIMIT,
    MAX_DATABASE_SEARCH_LIMIT,
)
from src.core.limiter import limiter

__all__ = [
    "Settings",
    "get_settings",
    "MAX_SEARCH_RESULTS",
    "MIN_RELEVANCE_SCORE",
    "DEFAULT_DATABASE_SEARCH_LIMIT",
    "MAX_DATABASE_SEARCH_LIMIT",
    "limiter",
]
