"""
Page Content Model

Static marketing page copy, one live record per page type.
"""

from enum import Enum
from typing import Dict, List, Optional

from sqlalchemy import JSON, Index
from sqlmodel import Column, Field

from app.models.base import LIVE_ROWS_POSTGRES, LIVE_ROWS_SQLITE, ContentBase


class PageType(str, Enum):
    STORY = "story"
    LEADERSHIP_TEAM = "leadershipTeam"
    LANDING = "landing"
    VISION = "vision"
    INVESTMENT_STRATEGY = "investmentStrategy"
    PARTNERS = "partners"
    INSIGHTS = "insights"
    SUCCESS_STORIES = "successStories"
    PERFORMANCE_METRICS = "performanceMetrics"
    JOIN_SUCCESS = "joinSuccess"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class PageContent(ContentBase, table=True):
    __tablename__ = "page_content"

    page_content_id: str = Field(unique=True, index=True, max_length=36)
    page_type: str = Field(max_length=50, index=True)  # PageType value
    title: Optional[str] = Field(default=None, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200, index=True)
    content: Optional[str] = Field(default=None, max_length=5050)
    subtitle: Optional[str] = Field(default=None, max_length=500)
    items: List[Dict[str, str]] = Field(default_factory=list, sa_column=Column(JSON, default=[]))  # [{title, description}]
    numbers: List[Dict[str, str]] = Field(default_factory=list, sa_column=Column(JSON, default=[]))  # [{value, label}]
    btn_txt: List[Dict[str, str]] = Field(default_factory=list, sa_column=Column(JSON, default=[]))  # [{buttonText}]

    __table_args__ = (
        # One live record per page type
        Index(
            "uq_page_content_live_type",
            "page_type",
            unique=True,
            sqlite_where=LIVE_ROWS_SQLITE,
            postgresql_where=LIVE_ROWS_POSTGRES,
        ),
    )


__all__ = ["PageContent", "PageType"]
