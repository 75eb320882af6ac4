"""
Default content for a fresh database.

Each step only runs when its table is empty, so seeding is safe to repeat.
Run at start-up when SEED_DEFAULT_DATA is enabled, or via scripts/seed_db.py.
"""

from typing import Dict

from sqlmodel import Session

from app.core.logging_config import get_logger
from app.core.read_time import estimate_read_time
from app.dao import base
from app.dao import blog as blog_dao
from app.dao import blog_type as blog_type_dao
from app.dao import landing_page as landing_page_dao
from app.models.base import utcnow
from app.models.blog import Blog
from app.models.blog_type import BlogType

logger = get_logger(__name__)

DEFAULT_LANDING_PAGE = {
    "header": "Welcome to Our Platform",
    "subtitle": "Your trusted partner for digital solutions and innovation",
    "numbers": [
        {"value": "100+", "label": "Happy Clients"},
        {"value": "50+", "label": "Projects Completed"},
        {"value": "5+", "label": "Years Experience"},
        {"value": "24/7", "label": "Support Available"},
    ],
}

DEFAULT_BLOG_TYPES = [
    {"name": "Technology", "slug": "technology", "description": "Latest technology trends and innovations"},
    {"name": "Lifestyle", "slug": "lifestyle", "description": "Lifestyle tips and personal stories"},
    {"name": "Business", "slug": "business", "description": "Business insights and strategies"},
]

# (blog fields, index of the blog type it belongs to)
SAMPLE_BLOGS = [
    (
        {
            "title": "Getting Started with Node.js",
            "slug": "getting-started-with-nodejs",
            "content": "Node.js is a powerful JavaScript runtime...",
            "excerpt": "Learn the basics of Node.js development",
            "author": "John Doe",
            "tags": ["nodejs", "javascript", "backend"],
        },
        0,
    ),
    (
        {
            "title": "Healthy Living Tips",
            "slug": "healthy-living-tips",
            "content": "Maintaining a healthy lifestyle is important...",
            "excerpt": "Simple tips for a healthier life",
            "author": "Jane Smith",
            "tags": ["health", "lifestyle", "wellness"],
        },
        1,
    ),
]


def seed_landing_page(session: Session) -> int:
    if landing_page_dao.count_landing_pages(session):
        logger.info("Landing page already exists, skipping default data")
        return 0
    landing_page_dao.create_or_update_landing_page(session, dict(DEFAULT_LANDING_PAGE))
    logger.info("Default landing page created")
    return 1


def seed_blog_types(session: Session) -> int:
    if base.count(session, BlogType):
        logger.info("Blog types already exist, skipping default data")
        return 0
    for data in DEFAULT_BLOG_TYPES:
        blog_type_dao.create_blog_type(session, {**data, "is_active": True})
    logger.info("Default blog types created", count=len(DEFAULT_BLOG_TYPES))
    return len(DEFAULT_BLOG_TYPES)


def seed_sample_blogs(session: Session) -> int:
    if base.count(session, Blog):
        logger.info("Blog posts already exist, skipping default data")
        return 0

    blog_types = blog_type_dao.get_active_types(session)
    by_slug = {blog_type.slug: blog_type for blog_type in blog_types}
    ordered = [by_slug.get(data["slug"]) for data in DEFAULT_BLOG_TYPES]
    ordered = [blog_type for blog_type in ordered if blog_type is not None] or blog_types
    if not ordered:
        logger.warning("No blog types available, skipping sample blogs")
        return 0

    created = 0
    for data, type_index in SAMPLE_BLOGS:
        blog_type = ordered[type_index] if type_index < len(ordered) else ordered[0]
        blog_dao.create_blog(
            session,
            {
                **data,
                "type_id": blog_type.type_id,
                "is_published": True,
                "published_at": utcnow(),
                "read_time": estimate_read_time(data["content"]),
            },
        )
        created += 1
    logger.info("Default blog posts created", count=created)
    return created


def seed_default_data(session: Session) -> Dict[str, int]:
    """Seed every default data set. Returns how many records each step created."""
    return {
        "landing_page": seed_landing_page(session),
        "blog_types": seed_blog_types(session),
        "blogs": seed_sample_blogs(session),
    }
