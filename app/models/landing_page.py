from typing import Dict, List

from sqlalchemy import JSON, Index
from sqlmodel import Column, Field

from app.models.base import LIVE_ROWS_POSTGRES, LIVE_ROWS_SQLITE, ContentBase


class LandingPage(ContentBase, table=True):
    """Landing page hero. Singleton: at most one live row."""

    __tablename__ = "landing_page"

    landing_page_id: str = Field(unique=True, index=True, max_length=36)
    header: str = Field(max_length=200)
    subtitle: str = Field(max_length=500)
    numbers: List[Dict[str, str]] = Field(default_factory=list, sa_column=Column(JSON, default=[]))  # [{value, label}]

    __table_args__ = (
        Index(
            "uq_landing_page_live",
            "is_deleted",
            unique=True,
            sqlite_where=LIVE_ROWS_SQLITE,
            postgresql_where=LIVE_ROWS_POSTGRES,
        ),
    )


__all__ = ["LandingPage"]
