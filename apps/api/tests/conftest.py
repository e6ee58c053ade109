"""Pytest configuration and fixtures for the search API.

Records are plain domain records (no database); the chat provider and the
database session are replaced with AsyncMock where a test needs them.
"""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.core import limiter
from src.dependencies import get_db, get_optional_chat_provider
from src.domain import ChallengeRecord, IdeaRecord, PartnershipRecord, UserRecord
from src.main import app


@pytest.fixture
def water_challenge() -> ChallengeRecord:
    return ChallengeRecord(
        id="c1",
        title="Sustainable Water Management Solutions",
        description="Improve how cities plan resources.",
        organization="Ministry of Environment",
        status="open",
    )


@pytest.fixture
def water_idea() -> IdeaRecord:
    return IdeaRecord(
        id="i1",
        title="Smart Water Conservation System",
        description="Sensors that cut irrigation use on farms.",
        category="Agriculture",
        stage="prototype",
        target_audience="Farmers",
        potential_impact="Lower irrigation costs",
        resources_needed=None,
        participants=[],
    )


@pytest.fixture
def health_user() -> UserRecord:
    return UserRecord(
        id="u1",
        first_name="Amina",
        last_name="Okafor",
        email="amina@example.org",
        organization=None,
        bio="Health technology startup",
        role="startup",
    )


@pytest.fixture
def energy_partnership() -> PartnershipRecord:
    return PartnershipRecord(
        id="p1",
        title="Community Microgrid Pilot",
        description="Shared storage for neighbourhoods.",
        participants=["GreenGrid Energy", "Solar Co-op"],
        status="active",
    )


@pytest.fixture
def dataset(water_challenge, water_idea, health_user, energy_partnership) -> dict[str, list]:
    return {
        "user": [health_user],
        "challenge": [water_challenge],
        "partnership": [energy_partnership],
        "idea": [water_idea],
    }


@pytest.fixture
def db_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
async def client(db_session):
    """Async HTTP client against the FastAPI app with DB, LLM and rate limits stubbed out."""

    async def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_optional_chat_provider] = lambda: None
    limiter.enabled = False
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        limiter.enabled = True
        app.dependency_overrides.clear()
