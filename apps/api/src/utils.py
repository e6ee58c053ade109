"""Shared utilities."""

from src.core.constants import LOG_QUERY_MAX_CHARS


def strip_json_from_response(raw: str) -> str:
    """Strip markdown/code fences from an LLM response and return JSON text."""
    s = (raw or "").strip()
    if "```" not in s:
        return s
    for part in s.split("```"):
        p = part.strip()
        if p.lower().startswith("json"):
            p = p[4:].strip()
        if p.startswith("{"):
            return p
    return s


def truncate_for_log(value: str | None, max_len: int = LOG_QUERY_MAX_CHARS) -> str:
    """Shorten user text before it goes into a log line."""
    s = (value or "").strip()
    return s if len(s) <= max_len else s[:max_len] + "..."
