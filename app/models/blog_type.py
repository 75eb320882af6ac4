from typing import Optional

from sqlmodel import Field

from app.models.base import ContentBase


class BlogType(ContentBase, table=True):
    """Blog category. Deleting one soft-deletes its blogs too."""

    __tablename__ = "blog_type"

    type_id: str = Field(unique=True, index=True, max_length=36)
    name: str = Field(unique=True, max_length=100)
    slug: str = Field(unique=True, index=True, max_length=100)
    description: Optional[str] = Field(default="", max_length=500)
    is_active: bool = Field(default=True, index=True)


__all__ = ["BlogType"]
