"""
Blog Model

Blogs reference their category by its external ``type_id`` value, not by a
foreign key on the row id, so a category can be soft deleted and recreated
without touching blog rows.

Usage:
    from app.models.blog import Blog

    blog = Blog(
        blog_id=generate_uuid(),
        title="Getting Started with Node.js",
        slug="getting-started-with-nodejs",
        content="<p>...</p>",
        excerpt="Learn the basics",
        author="John Doe",
        type_id=technology.type_id,
    )
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Index, Text
from sqlmodel import Column, Field

from app.models.base import ContentBase


class Blog(ContentBase, table=True):
    """
    Blog post.

    Attributes:
        blog_id: External identifier (UUID v4)
        slug: URL-friendly unique identifier
        content: Sanitized HTML body
        type_id: External id of the owning BlogType
        tags: JSON array of tags
        published_at: Set on the first transition to published
        view_count: Incremented by public single-blog reads
        read_time: Minutes, 1..120
    """

    __tablename__ = "blog"

    blog_id: str = Field(unique=True, index=True, max_length=36)
    title: str = Field(max_length=200)
    slug: str = Field(unique=True, index=True, max_length=200)
    content: str = Field(sa_column=Column(Text, nullable=False))
    excerpt: str = Field(max_length=500)
    author: str = Field(max_length=100)
    type_id: str = Field(index=True, max_length=36)
    image: Optional[str] = Field(default=None, max_length=2048)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, default=[]))
    is_published: bool = Field(default=False)
    published_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    view_count: int = Field(default=0)
    read_time: int = Field(default=1)  # minutes

    __table_args__ = (
        # Per-category listing, newest first
        Index("ix_blog_type_live_published", "type_id", "is_deleted", "is_published", "published_at"),
        Index("ix_blog_published", "is_published", "published_at"),
    )


__all__ = ["Blog"]
