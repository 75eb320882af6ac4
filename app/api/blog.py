"""Blog and blog type endpoints."""
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.api.responses import created, ok
from app.core.errors import BadRequest, NotFound
from app.core.rate_limit import BLOG_TYPE_WRITE, BLOG_WRITE, GENERAL, rate_limit
from app.db import get_session
from app.middleware.audit import security_audit
from app.schemas.blog import (
    BlogCreate,
    BlogOut,
    BlogPage,
    BlogTypeCreate,
    BlogTypeDeleteResult,
    BlogTypeOut,
    BlogTypeUpdate,
    BlogUpdate,
    TypeWithBlogs,
)
from app.services import blog as blog_service

router = APIRouter(dependencies=[Depends(rate_limit(GENERAL))])

blog_write = [Depends(rate_limit(BLOG_WRITE)), Depends(security_audit)]
blog_type_write = [Depends(rate_limit(BLOG_TYPE_WRITE)), Depends(security_audit)]


def _require(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise BadRequest(message)
    return value.strip()


# ============== READS ==============


@router.get("/getTypesWithBlogs")
def get_types_with_blogs(
    limit: int = Query(default=5, ge=1, le=100),
    admin: bool = Query(default=False),
    session: Session = Depends(get_session),
) -> Any:
    """
    Every active blog type with its newest blogs (at most ``limit`` each).

    ``admin=true`` includes unpublished blogs.
    """
    result = blog_service.get_types_with_blogs(session, limit=limit, admin=admin)
    mode = " (admin mode - includes unpublished)" if admin else ""
    data = [TypeWithBlogs.model_validate(item) for item in result]
    return ok(f"Types with blogs retrieved successfully{mode}", data)


@router.get("/getBlogsByType")
def get_blogs_by_type(
    type_id: Optional[str] = Query(default=None, alias="typeId"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    session: Session = Depends(get_session),
) -> Any:
    type_id = _require(type_id, "Type ID is required")
    result = blog_service.get_blogs_by_type(session, type_id, page=page, limit=limit)
    return ok("Blogs retrieved successfully", BlogPage.model_validate(result))


@router.get("/getBlogByBlogId")
def get_blog_by_blog_id(
    blog_id: Optional[str] = Query(default=None, alias="blogId"),
    admin: bool = Query(default=False),
    session: Session = Depends(get_session),
) -> Any:
    blog_id = _require(blog_id, "Blog ID is required")
    blog = blog_service.get_blog(session, blog_id, admin=admin)
    if blog is None:
        raise NotFound(f"Blog not found{' (including unpublished)' if admin else ''}")
    mode = " (admin mode)" if admin else ""
    return ok(f"Blog retrieved successfully{mode}", BlogOut.model_validate(blog))


@router.get("/getBlogBySlug")
def get_blog_by_slug(
    slug: Optional[str] = Query(default=None),
    session: Session = Depends(get_session),
) -> Any:
    slug = _require(slug, "Slug is required")
    blog = blog_service.get_blog_by_slug(session, slug)
    if blog is None:
        raise NotFound("Blog not found")
    return ok("Blog retrieved successfully", BlogOut.model_validate(blog))


@router.get("/searchBlogs")
def search_blogs(
    search: Optional[str] = Query(default=None, max_length=200),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    session: Session = Depends(get_session),
) -> Any:
    """Published blogs whose title, excerpt or body contains ``search``."""
    term = _require(search, "Search term is required")
    result = blog_service.search_blogs(session, term, page=page, limit=limit)
    return ok("Blogs retrieved successfully", BlogPage.model_validate(result))


@router.get("/getBlogTypes")
def get_blog_types(session: Session = Depends(get_session)) -> Any:
    types = blog_service.get_blog_types(session)
    return ok("Blog types retrieved successfully", [BlogTypeOut.model_validate(t) for t in types])


# ============== BLOG WRITES ==============


@router.post("/createBlog", dependencies=blog_write)
def create_blog(payload: BlogCreate, session: Session = Depends(get_session)) -> Any:
    blog = blog_service.create_blog(session, payload)
    return created("Blog created successfully", BlogOut.model_validate(blog))


@router.post("/updateBlog", dependencies=blog_write)
def update_blog(
    payload: BlogUpdate,
    blog_id: Optional[str] = Query(default=None, alias="blogId"),
    session: Session = Depends(get_session),
) -> Any:
    blog_id = _require(blog_id, "Blog ID is required")
    blog = blog_service.update_blog(session, blog_id, payload)
    return ok("Blog updated successfully", BlogOut.model_validate(blog))


@router.post("/deleteBlog", dependencies=blog_write)
def delete_blog(
    blog_id: Optional[str] = Query(default=None, alias="blogId"),
    session: Session = Depends(get_session),
) -> Any:
    blog_id = _require(blog_id, "Blog ID is required")
    blog_service.delete_blog(session, blog_id)
    return ok("Blog deleted successfully")


# ============== BLOG TYPE WRITES ==============


@router.post("/createBlogType", dependencies=blog_type_write)
def create_blog_type(payload: BlogTypeCreate, session: Session = Depends(get_session)) -> Any:
    blog_type = blog_service.create_blog_type(session, payload)
    return created("Blog type created successfully", BlogTypeOut.model_validate(blog_type))


@router.post("/updateBlogType", dependencies=blog_type_write)
def update_blog_type(
    payload: BlogTypeUpdate,
    type_id: Optional[str] = Query(default=None, alias="typeId"),
    session: Session = Depends(get_session),
) -> Any:
    type_id = _require(type_id, "Type ID is required")
    blog_type = blog_service.update_blog_type(session, type_id, payload)
    return ok("Blog type updated successfully", BlogTypeOut.model_validate(blog_type))


@router.post("/deleteBlogType", dependencies=blog_type_write)
def delete_blog_type(
    type_id: Optional[str] = Query(default=None, alias="typeId"),
    session: Session = Depends(get_session),
) -> Any:
    """Soft delete a blog type and every live blog in it."""
    type_id = _require(type_id, "Type ID is required")
    deleted, blog_ids = blog_service.delete_blog_type(session, type_id)
    if not deleted:
        raise NotFound("Blog type not found or already deleted")

    if blog_ids:
        message = f"Blog type and {len(blog_ids)} associated blogs deleted successfully"
    else:
        message = "Blog type deleted successfully (no associated blogs found)"
    result = BlogTypeDeleteResult(
        blog_type_deleted=deleted,
        deleted_blog_ids=blog_ids,
        blogs_deleted_count=len(blog_ids),
    )
    return ok(message, result)
