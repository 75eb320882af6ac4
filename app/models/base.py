"""
Shared columns for content tables.

Every content record carries a stable external id (defined per table), a
soft-delete marker and storage-maintained timestamps. Rows are never hard
deleted.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, text
from sqlmodel import Field, SQLModel

# Partial-index predicates selecting live rows
LIVE_ROWS_SQLITE = text("is_deleted = 0")
LIVE_ROWS_POSTGRES = text("is_deleted = false")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentBase(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True)

    is_deleted: bool = Field(default=False, index=True)
    deleted_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utcnow},
    )
