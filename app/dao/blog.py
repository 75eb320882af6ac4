"""
Blog data access.

The category overview (``get_types_with_blogs``) is a single statement: blogs
are ranked per category with ROW_NUMBER() and left joined onto the active
categories, so categories without blogs still come back.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import and_, func, or_, update
from sqlmodel import Session, select

from app.core.ids import generate_uuid
from app.dao import base
from app.models.blog import Blog
from app.models.blog_type import BlogType

# Newest first, unpublished (NULL publish date) last
NEWEST_FIRST = (Blog.published_at.desc().nulls_last(), Blog.created_at.desc())


def _visible(admin: bool = False) -> list:
    conditions = [base.live(Blog)]
    if not admin:
        conditions.append(Blog.is_published == True)  # noqa: E712
    return conditions


def get_types_with_blogs(session: Session, limit: int = 5, admin: bool = False) -> List[Dict[str, Any]]:
    """
    Active categories (by name) each with up to ``limit`` newest blogs.

    Admin mode includes unpublished blogs.
    """
    ranked = (
        select(
            Blog.type_id,
            Blog.blog_id,
            Blog.title,
            Blog.slug,
            Blog.excerpt,
            Blog.author,
            Blog.image,
            Blog.tags,
            Blog.published_at,
            Blog.view_count,
            func.row_number().over(partition_by=Blog.type_id, order_by=NEWEST_FIRST).label("rn"),
        )
        .where(*_visible(admin))
        .subquery()
    )

    query = (
        select(
            BlogType.type_id,
            BlogType.name,
            BlogType.slug,
            BlogType.description,
            ranked.c.blog_id,
            ranked.c.title.label("blog_title"),
            ranked.c.slug.label("blog_slug"),
            ranked.c.excerpt,
            ranked.c.author,
            ranked.c.image,
            ranked.c.tags,
            ranked.c.published_at,
            ranked.c.view_count,
        )
        .select_from(BlogType)
        .outerjoin(ranked, and_(ranked.c.type_id == BlogType.type_id, ranked.c.rn <= limit))
        .where(BlogType.is_active == True, base.live(BlogType))  # noqa: E712
        .order_by(BlogType.name.asc(), ranked.c.rn.asc())
    )

    categories: Dict[str, Dict[str, Any]] = {}
    for row in session.exec(query).all():
        category = categories.get(row.type_id)
        if category is None:
            category = {
                "type_id": row.type_id,
                "name": row.name,
                "slug": row.slug,
                "description": row.description,
                "blogs": [],
            }
            categories[row.type_id] = category

        # No matching blog: the outer join yields NULL blog columns
        if row.blog_id is None:
            continue
        category["blogs"].append(
            {
                "blog_id": row.blog_id,
                "title": row.blog_title,
                "slug": row.blog_slug,
                "excerpt": row.excerpt,
                "author": row.author,
                "image": row.image,
                "tags": row.tags or [],
                "published_at": row.published_at,
                "view_count": row.view_count,
            }
        )

    return list(categories.values())


def get_blogs_by_type(session: Session, type_id: str, page: int = 1, limit: int = 10) -> Tuple[List[Blog], int, int]:
    """Published live blogs of one category. Returns (blogs, total, total_pages)."""
    return base.paginate(
        session,
        Blog,
        Blog.type_id == type_id,
        *_visible(),
        page=page,
        limit=limit,
        order_by=NEWEST_FIRST,
    )


def search_blogs(session: Session, term: str, page: int = 1, limit: int = 10) -> Tuple[List[Blog], int, int]:
    """Case-insensitive substring match over title, excerpt and content."""
    pattern = f"%{term}%"
    matches = or_(Blog.title.ilike(pattern), Blog.excerpt.ilike(pattern), Blog.content.ilike(pattern))
    return base.paginate(session, Blog, matches, *_visible(), page=page, limit=limit, order_by=NEWEST_FIRST)


def get_by_blog_id(session: Session, blog_id: str, admin: bool = False) -> Optional[Blog]:
    return base.find_one(session, Blog, Blog.blog_id == blog_id, *_visible(admin))


def get_by_slug(session: Session, slug: str) -> Optional[Blog]:
    return base.find_one(session, Blog, Blog.slug == slug, *_visible())


def create_blog(session: Session, data: Dict[str, Any]) -> Blog:
    blog = Blog(blog_id=generate_uuid(), **data)
    return base.insert(session, blog)


def update_blog(session: Session, blog: Blog, changes: Dict[str, Any]) -> Blog:
    return base.apply_changes(session, blog, changes)


def delete_by_blog_id(session: Session, blog_id: str) -> bool:
    blog = get_by_blog_id(session, blog_id, admin=True)
    if blog is None:
        return False
    base.soft_delete(session, blog)
    return True


def increment_view_count(session: Session, blog_id: str) -> None:
    # Single UPDATE so concurrent readers never lose an increment
    session.execute(update(Blog).where(Blog.blog_id == blog_id).values(view_count=Blog.view_count + 1))
    session.commit()


def soft_delete_by_type(session: Session, type_id: str) -> List[str]:
    """
    Stage soft deletion of every live blog in a category (no commit).

    Returns the external ids of the blogs touched.
    """
    blogs = base.find_many(session, Blog, Blog.type_id == type_id, base.live(Blog))
    for blog in blogs:
        base.soft_delete(session, blog, commit=False)
    return [blog.blog_id for blog in blogs]
