from typing import Any, Dict, List

from sqlalchemy import JSON, Index
from sqlmodel import Column, Field

from app.models.base import LIVE_ROWS_POSTGRES, LIVE_ROWS_SQLITE, ContentBase


class Footer(ContentBase, table=True):
    """Site footer. Singleton: at most one live row."""

    __tablename__ = "footer"

    footer_id: str = Field(unique=True, index=True, max_length=36)
    company_name: str = Field(max_length=200)
    company_description: str = Field(max_length=1000)
    contact: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))  # email, phone, address
    sections: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, default=[]))
    social_media: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, default=[]))
    back_to_top_text: str = Field(max_length=100)
    copyright_text: str = Field(max_length=500)
    legal_links: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, default=[]))

    __table_args__ = (
        Index(
            "uq_footer_live",
            "is_deleted",
            unique=True,
            sqlite_where=LIVE_ROWS_SQLITE,
            postgresql_where=LIVE_ROWS_POSTGRES,
        ),
    )


__all__ = ["Footer"]
