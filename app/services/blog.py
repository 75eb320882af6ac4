"""
Blog Service

Business rules for blogs and blog types on top of the data access layer:
- every text field is sanitized, blog bodies keep safe markup
- slug is derived from the title when omitted
- read time is estimated from the body unless given explicitly
- publishedAt is stamped on the first transition to published
- public single-blog reads count a view
- deleting a blog type soft deletes its blogs in the same commit
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlmodel import Session

from app.core.errors import NotFound
from app.core.ids import generate_uuid
from app.core.logging_config import get_logger
from app.core.read_time import estimate_read_time
from app.core.sanitizer import normalize_slug, sanitize_html, sanitize_text, slugify
from app.dao import blog as blog_dao
from app.dao import blog_type as blog_type_dao
from app.models.base import utcnow
from app.models.blog import Blog
from app.models.blog_type import BlogType
from app.schemas.base import to_changes
from app.schemas.blog import BlogCreate, BlogTypeCreate, BlogTypeUpdate, BlogUpdate

logger = get_logger(__name__)

TEXT_FIELDS = ("title", "excerpt", "author", "name", "description")
# Columns a caller may explicitly clear with null
NULLABLE_FIELDS = {"image", "description"}


def _sanitize(data: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = dict(data)
    for field in TEXT_FIELDS:
        if cleaned.get(field):
            cleaned[field] = sanitize_text(cleaned[field])
    if cleaned.get("slug"):
        cleaned["slug"] = normalize_slug(cleaned["slug"])
    if cleaned.get("content"):
        cleaned["content"] = sanitize_html(cleaned["content"])
    if cleaned.get("tags"):
        tags = (sanitize_text(tag) for tag in cleaned["tags"])
        cleaned["tags"] = [tag for tag in tags if tag]
    return cleaned


def _drop_nulls(changes: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in changes.items() if value is not None or key in NULLABLE_FIELDS}


# ============== READS ==============


def get_types_with_blogs(session: Session, limit: int = 5, admin: bool = False) -> List[Dict[str, Any]]:
    result = blog_dao.get_types_with_blogs(session, limit=limit, admin=admin)
    logger.info("Retrieved types with blogs", count=len(result), mode="admin" if admin else "public")
    return result


def get_blogs_by_type(session: Session, type_id: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
    blogs, total, total_pages = blog_dao.get_blogs_by_type(session, type_id, page=page, limit=limit)
    logger.info("Retrieved blogs for type", type_id=type_id, count=len(blogs), total=total)
    return {"blogs": blogs, "total": total, "total_pages": total_pages}


def search_blogs(session: Session, term: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
    blogs, total, total_pages = blog_dao.search_blogs(session, term, page=page, limit=limit)
    logger.info("Searched blogs", term=term, total=total)
    return {"blogs": blogs, "total": total, "total_pages": total_pages}


def _count_view(session: Session, blog: Blog) -> Blog:
    blog_dao.increment_view_count(session, blog.blog_id)
    session.refresh(blog)
    return blog


def get_blog(session: Session, blog_id: str, admin: bool = False) -> Optional[Blog]:
    """
    Single live blog. Public reads only see published blogs and count a view;
    admin reads see drafts and leave the counter alone.
    """
    blog = blog_dao.get_by_blog_id(session, blog_id, admin=admin)
    if blog is None:
        return None
    logger.info("Retrieved blog", blog_id=blog_id, mode="admin" if admin else "public")
    if not admin:
        blog = _count_view(session, blog)
    return blog


def get_blog_by_slug(session: Session, slug: str) -> Optional[Blog]:
    blog = blog_dao.get_by_slug(session, slug.lower())
    if blog is None:
        return None
    return _count_view(session, blog)


def get_blog_types(session: Session) -> List[BlogType]:
    types = blog_type_dao.get_active_types(session)
    logger.info("Retrieved blog types", count=len(types))
    return types


# ============== BLOG WRITES ==============


def create_blog(session: Session, payload: BlogCreate) -> Blog:
    data = _sanitize(payload.model_dump())

    if not data.get("slug"):
        data["slug"] = slugify(data["title"]) or f"blog-{generate_uuid()[:8]}"
    if data.get("read_time") is None:
        data["read_time"] = estimate_read_time(data["content"])
    if data["is_published"]:
        data["published_at"] = utcnow()

    blog = blog_dao.create_blog(session, data)
    logger.info("Created blog", blog_id=blog.blog_id, slug=blog.slug, published=blog.is_published)
    return blog


def update_blog(session: Session, blog_id: str, payload: BlogUpdate) -> Blog:
    blog = blog_dao.get_by_blog_id(session, blog_id, admin=True)
    if blog is None:
        raise NotFound("Blog not found or could not be updated")

    changes = _drop_nulls(_sanitize(to_changes(payload)))

    if changes.get("is_published") and blog.published_at is None:
        changes["published_at"] = utcnow()
    if "content" in changes and changes.get("read_time") is None:
        changes["read_time"] = estimate_read_time(changes["content"])

    blog = blog_dao.update_blog(session, blog, changes)
    logger.info("Updated blog", blog_id=blog_id, fields=sorted(changes))
    return blog


def delete_blog(session: Session, blog_id: str) -> None:
    if not blog_dao.delete_by_blog_id(session, blog_id):
        raise NotFound("Blog not found or already deleted")
    logger.info("Deleted blog", blog_id=blog_id)


# ============== BLOG TYPE WRITES ==============


def create_blog_type(session: Session, payload: BlogTypeCreate) -> BlogType:
    data = _sanitize(payload.model_dump())
    blog_type = blog_type_dao.create_blog_type(session, data)
    logger.info("Created blog type", type_id=blog_type.type_id, slug=blog_type.slug)
    return blog_type


def update_blog_type(session: Session, type_id: str, payload: BlogTypeUpdate) -> BlogType:
    changes = _drop_nulls(_sanitize(to_changes(payload)))
    blog_type = blog_type_dao.update_by_type_id(session, type_id, changes)
    if blog_type is None:
        raise NotFound("Blog type not found or could not be updated")
    logger.info("Updated blog type", type_id=type_id, fields=sorted(changes))
    return blog_type


def delete_blog_type(session: Session, type_id: str) -> Tuple[bool, List[str]]:
    """Soft delete a blog type and its live blogs. Returns (deleted, deleted_blog_ids)."""
    deleted, blog_ids = blog_type_dao.delete_with_blogs(session, type_id)
    if deleted:
        logger.info("Deleted blog type", type_id=type_id, blogs_deleted=len(blog_ids))
    return deleted, blog_ids
