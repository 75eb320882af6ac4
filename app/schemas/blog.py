from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, AnyUrl, Field, TypeAdapter

from app.schemas.base import CamelModel, PartialUpdate

_uri = TypeAdapter(AnyUrl)


def _check_image_uri(value: Optional[str]) -> Optional[str]:
    # Empty string clears the image
    if value:
        try:
            _uri.validate_python(value)
        except ValueError:
            raise ValueError("must be a valid uri") from None
    return value


ImageUri = Annotated[Optional[str], AfterValidator(_check_image_uri)]
Tag = Annotated[str, Field(max_length=50)]
Slug = Annotated[str, AfterValidator(str.lower)]


# ---------- requests ----------


class BlogCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    slug: Optional[Slug] = Field(default=None, max_length=200)
    content: str = Field(min_length=1)
    excerpt: str = Field(min_length=1, max_length=500)
    author: str = Field(min_length=1, max_length=100)
    type_id: str = Field(min_length=1)
    image: ImageUri = None
    tags: List[Tag] = Field(default_factory=list)
    read_time: Optional[int] = Field(default=None, ge=1, le=120)
    is_published: bool = False


class BlogUpdate(PartialUpdate):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[Slug] = Field(default=None, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)
    excerpt: Optional[str] = Field(default=None, max_length=500)
    author: Optional[str] = Field(default=None, max_length=100)
    type_id: Optional[str] = None
    image: ImageUri = None
    tags: Optional[List[Tag]] = None
    read_time: Optional[int] = Field(default=None, ge=1, le=120)
    is_published: Optional[bool] = None


class BlogTypeCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    slug: Slug = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default="", max_length=500)
    is_active: bool = True


class BlogTypeUpdate(PartialUpdate):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    slug: Optional[Slug] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    is_active: Optional[bool] = None


# ---------- responses ----------


class BlogOut(CamelModel):
    blog_id: str
    title: str
    slug: str
    content: str
    excerpt: str
    author: str
    type_id: str
    image: Optional[str] = None
    tags: List[str] = []
    is_published: bool
    published_at: Optional[datetime] = None
    view_count: int
    read_time: int
    is_deleted: bool
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class BlogSummary(CamelModel):
    blog_id: str
    title: str
    slug: str
    excerpt: str
    author: str
    image: Optional[str] = None
    tags: List[str] = []
    published_at: Optional[datetime] = None
    view_count: int = 0


class BlogTypeOut(CamelModel):
    type_id: str
    name: str
    slug: str
    description: Optional[str] = None
    is_active: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


class TypeWithBlogs(CamelModel):
    type_id: str
    name: str
    slug: str
    description: Optional[str] = None
    blogs: List[BlogSummary] = []


class BlogPage(CamelModel):
    blogs: List[BlogOut]
    total: int
    total_pages: int


class BlogTypeDeleteResult(CamelModel):
    blog_type_deleted: bool
    deleted_blog_ids: List[str]
    blogs_deleted_count: int
