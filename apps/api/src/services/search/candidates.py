"""Candidate fetch: every record of one entity type as a read-only domain record."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Challenge, Idea, Partnership, User
from src.domain import (
    ChallengeRecord,
    IdeaRecord,
    PartnershipRecord,
    SearchableRecord,
    UserRecord,
)


def _split_simple_array(value: str | None) -> list[str]:
    return [p.strip() for p in (value or "").split(",") if p.strip()]


def user_to_record(u: User) -> UserRecord:
    return UserRecord(
        id=str(u.id),
        first_name=u.first_name or "",
        last_name=u.last_name or "",
        email=u.email or "",
        organization=u.organization,
        bio=u.bio,
        role=u.role or "",
    )


def challenge_to_record(c: Challenge) -> ChallengeRecord:
    return ChallengeRecord(
        id=str(c.id),
        title=c.title or "",
        description=c.description or "",
        organization=c.organization or "",
        status=c.status or "open",
    )


def partnership_to_record(p: Partnership) -> PartnershipRecord:
    return PartnershipRecord(
        id=str(p.id),
        title=p.title or "",
        description=p.description or "",
        participants=_split_simple_array(p.participants),
        status=p.status or "proposed",
    )


def idea_to_record(i: Idea) -> IdeaRecord:
    return IdeaRecord(
        id=str(i.id),
        title=i.title or "",
        description=i.description or "",
        category=i.category or "",
        stage=i.stage or "concept",
        target_audience=i.target_audience or "",
        potential_impact=i.potential_impact or "",
        resources_needed=i.resources_needed,
        participants=[p for p in (i.participants or []) if p],
    )


_SOURCES = {
    "user": (User, user_to_record),
    "challenge": (Challenge, challenge_to_record),
    "partnership": (Partnership, partnership_to_record),
    "idea": (Idea, idea_to_record),
}


async def fetch_all(db: AsyncSession, entity_type: str) -> list[SearchableRecord]:
    """All rows of one entity type. Database errors propagate to the caller."""
    model, to_record = _SOURCES[entity_type]
    result = await db.execute(select(model))
    return [to_record(row) for row in result.scalars().all()]
