"""
LLM prompt templates for search.

  - PROMPT_SEARCH_INTERPRETATION: raw query to intent, entities, synonyms, filters,
                                   expanded query, search type (JSON object)
"""

from .search_interpretation import PROMPT_SEARCH_INTERPRETATION

__all__ = [
    "PROMPT_SEARCH_INTERPRETATION",
]
