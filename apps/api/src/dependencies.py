import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.db.session import async_session
from src.providers import ChatProvider, get_chat_provider

logger = logging.getLogger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_optional_chat_provider() -> ChatProvider | None:
    """Configured chat provider, or None so AI search runs on the fallback interpretation."""
    try:
        return get_chat_provider()
    except RuntimeError as e:
        logger.warning("AI search without LLM interpretation: %s", e)
        return None
