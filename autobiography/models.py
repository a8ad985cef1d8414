"""
SQLModel Database Models

One row per user holding the whole autobiography aggregate, plus one row per
shared snapshot. Aggregates are stored as JSON documents; the store reads and
writes them whole (last writer wins).
"""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AutobiographyRecord(SQLModel, table=True):
    """
    The saved aggregate for one user identity.

    `updated_at` mirrors the aggregate's own save stamp for listing.
    """
    __tablename__ = "autobiographies"

    user_id: str = Field(primary_key=True)  # Identity provider UID
    data_json: str  # AutobiographyData as JSON
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))


class SharedStoryRecord(SQLModel, table=True):
    """
    Immutable snapshot behind a shareable link.

    Rows are only ever inserted; sharing again creates a new row.
    """
    __tablename__ = "shared_stories"

    id: str = Field(primary_key=True)  # Public share token
    owner_id: str = Field(index=True)
    data_json: str  # Frozen AutobiographyData as JSON
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
