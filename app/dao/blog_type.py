from typing import Any, Dict, List, Optional, Tuple

from sqlmodel import Session

from app.core.ids import generate_uuid
from app.core.logging_config import get_logger
from app.dao import base
from app.dao.blog import soft_delete_by_type
from app.models.blog_type import BlogType

logger = get_logger(__name__)


def get_active_types(session: Session) -> List[BlogType]:
    return base.find_many(
        session,
        BlogType,
        BlogType.is_active == True,  # noqa: E712
        base.live(BlogType),
        order_by=(BlogType.name.asc(),),
    )


def get_by_type_id(session: Session, type_id: str) -> Optional[BlogType]:
    """Live category by external id (active or not)."""
    return base.find_one(session, BlogType, BlogType.type_id == type_id, base.live(BlogType))


def create_blog_type(session: Session, data: Dict[str, Any]) -> BlogType:
    blog_type = BlogType(type_id=generate_uuid(), **data)
    return base.insert(session, blog_type)


def update_by_type_id(session: Session, type_id: str, changes: Dict[str, Any]) -> Optional[BlogType]:
    blog_type = get_by_type_id(session, type_id)
    if blog_type is None:
        return None
    return base.apply_changes(session, blog_type, changes)


def delete_with_blogs(session: Session, type_id: str) -> Tuple[bool, List[str]]:
    """
    Soft delete a category and every live blog in it, in one commit.

    Returns:
        (blog_type_deleted, deleted_blog_ids). A missing or already deleted
        category returns (False, []) without writing anything.
    """
    blog_type = get_by_type_id(session, type_id)
    if blog_type is None:
        return False, []

    deleted_blog_ids = soft_delete_by_type(session, type_id)
    base.soft_delete(session, blog_type, commit=False)
    session.commit()

    logger.info(
        "Blog type deleted with cascade",
        type_id=type_id,
        blogs_deleted=len(deleted_blog_ids),
    )
    return True, deleted_blog_ids
