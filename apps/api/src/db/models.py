"""Read-only ORM projections of the marketplace tables the search reads.

The tables are owned and migrated by the main backend; only the columns
search needs are mapped here.
"""

from sqlalchemy import Column, String, Text, DateTime, func
from sqlalchemy.dialects.postgresql import UUID, ARRAY

from .session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=False), primary_key=True)
    first_name = Column("firstName", String(100), nullable=False)
    last_name = Column("lastName", String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    organization = Column(String(255), nullable=True)
    bio = Column(String(500), nullable=True)
    role = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Challenge(Base):
    __tablename__ = "challenges"

    id = Column(UUID(as_uuid=False), primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    organization = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="open")
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Partnership(Base):
    __tablename__ = "partnerships"

    id = Column(UUID(as_uuid=False), primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    # Comma-separated participant names (simple-array column)
    participants = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="proposed")
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Idea(Base):
    __tablename__ = "ideas"

    id = Column(UUID(as_uuid=False), primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    participants = Column(ARRAY(Text), nullable=False, default=list)
    category = Column(String(255), nullable=False)
    stage = Column(String(20), nullable=False, default="concept")
    target_audience = Column(String(255), nullable=False)
    potential_impact = Column(String(255), nullable=False)
    resources_needed = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
