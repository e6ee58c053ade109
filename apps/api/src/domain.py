"""
Domain types for the marketplace records search reads.
Records are read-only projections; search never writes them back.
"""

from typing import Literal, Optional, get_args

from pydantic import BaseModel, Field

# -----------------------------------------------------------------------------
# 1. Entity types
# -----------------------------------------------------------------------------

EntityType = Literal["user", "challenge", "partnership", "idea"]

ENTITY_TYPES: tuple[str, ...] = get_args(EntityType)


# -----------------------------------------------------------------------------
# 2. Records
# -----------------------------------------------------------------------------

class UserRecord(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    organization: Optional[str] = None
    bio: Optional[str] = None
    role: str


class ChallengeRecord(BaseModel):
    id: str
    title: str
    description: str
    organization: str = ""
    status: str = "open"


class PartnershipRecord(BaseModel):
    id: str
    title: str
    description: str
    participants: list[str] = Field(default_factory=list)
    status: str = "proposed"


class IdeaRecord(BaseModel):
    id: str
    title: str
    description: str
    category: str = ""
    stage: str = "concept"
    target_audience: str = ""
    potential_impact: str = ""
    resources_needed: Optional[str] = None
    participants: list[str] = Field(default_factory=list)


SearchableRecord = UserRecord | ChallengeRecord | PartnershipRecord | IdeaRecord
