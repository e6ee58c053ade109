from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from apps/api so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    database_url: str = "postgresql://localhost/innovation_hub"
    sql_echo: bool = False

    # Only used to key rate limits per signed-in user
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"

    # Chat (OpenAI-compatible, e.g. Groq or vLLM); None => provider-specific default
    chat_api_base_url: str | None = None
    chat_api_key: str | None = None
    chat_model: str | None = None
    # Query interpretation gives up after this and uses the fallback interpretation
    chat_timeout_seconds: float = 30.0

    openai_api_key: str | None = None

    # Rate limiting (per-user when a bearer token decodes; else per IP)
    ai_search_rate_limit: str = "3/day"
    search_rate_limit: str = "100/15minutes"

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]

    @property
    def async_database_url(self) -> str:
        """database_url rewritten for the asyncpg driver (supports postgres:// from hosting providers)."""
        url = self.database_url
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://") and "asyncpg" not in url:
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
