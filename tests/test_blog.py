"""
Tests for blog and blog type data access and business rules.

Tests cover:
- Category overview (empty categories, per-category limit, ordering)
- Visibility of unpublished and deleted blogs
- Pagination and search
- Create/update rules (sanitization, slug, read time, publish date)
- View counting
- Cascade deletion of a category
- Timezone-aware timestamps
"""

from datetime import timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.errors import NotFound
from app.dao import base
from app.dao import blog as blog_dao
from app.dao import blog_type as blog_type_dao
from app.models.base import utcnow
from app.models.blog import Blog
from app.schemas.blog import BlogCreate, BlogTypeCreate, BlogTypeUpdate, BlogUpdate
from app.services import blog as blog_service


def _blog_payload(type_id: str, **extra) -> BlogCreate:
    data = {
        "title": "Hello World",
        "content": "<p>Some body text</p>",
        "excerpt": "A short excerpt",
        "author": "Jane Smith",
        "type_id": type_id,
    }
    data.update(extra)
    return BlogCreate(**data)


class TestTypesWithBlogs:
    """Tests for the category overview."""

    def test_category_without_blogs_included(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        make_blog_type("Business")
        make_blog(tech)

        result = blog_dao.get_types_with_blogs(test_session)

        by_name = {item["name"]: item for item in result}
        assert set(by_name) == {"Business", "Technology"}
        assert by_name["Business"]["blogs"] == []
        assert len(by_name["Technology"]["blogs"]) == 1

    def test_sorted_by_name(self, test_session: Session, make_blog_type):
        make_blog_type("Lifestyle")
        make_blog_type("Business")
        make_blog_type("Technology")

        names = [item["name"] for item in blog_dao.get_types_with_blogs(test_session)]
        assert names == ["Business", "Lifestyle", "Technology"]

    def test_inactive_and_deleted_types_excluded(self, test_session: Session, make_blog_type):
        make_blog_type("Technology")
        make_blog_type("Archive", is_active=False)
        gone = make_blog_type("Gone")
        blog_type_dao.delete_with_blogs(test_session, gone.type_id)

        names = [item["name"] for item in blog_dao.get_types_with_blogs(test_session)]
        assert names == ["Technology"]

    def test_limit_keeps_newest(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        now = utcnow()
        for days in range(4):
            make_blog(tech, title=f"{days} days old", published_at=now - timedelta(days=days))

        result = blog_dao.get_types_with_blogs(test_session, limit=2)

        titles = [blog["title"] for blog in result[0]["blogs"]]
        assert titles == ["0 days old", "1 days old"]

    def test_admin_includes_unpublished(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        make_blog(tech)
        make_blog(tech, is_published=False, published_at=None)

        public = blog_dao.get_types_with_blogs(test_session)
        admin = blog_dao.get_types_with_blogs(test_session, admin=True)

        assert len(public[0]["blogs"]) == 1
        assert len(admin[0]["blogs"]) == 2
        # Drafts sort after published blogs
        assert admin[0]["blogs"][-1]["published_at"] is None

    def test_deleted_blogs_excluded(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        blog = make_blog(tech)
        blog_dao.delete_by_blog_id(test_session, blog.blog_id)

        result = blog_dao.get_types_with_blogs(test_session, admin=True)
        assert result[0]["blogs"] == []


class TestListingAndSearch:
    """Tests for paginated listings."""

    def test_second_page(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        for _ in range(15):
            make_blog(tech)

        result = blog_service.get_blogs_by_type(test_session, tech.type_id, page=2, limit=10)

        assert len(result["blogs"]) == 5
        assert result["total"] == 15
        assert result["total_pages"] == 2

    def test_listing_excludes_drafts_and_other_types(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        life = make_blog_type("Lifestyle")
        make_blog(tech)
        make_blog(tech, is_published=False, published_at=None)
        make_blog(life)

        result = blog_service.get_blogs_by_type(test_session, tech.type_id)
        assert result["total"] == 1

    def test_unknown_type_is_empty_page(self, test_session: Session):
        result = blog_service.get_blogs_by_type(test_session, "missing")
        assert result == {"blogs": [], "total": 0, "total_pages": 0}

    def test_search_matches_title_excerpt_and_content(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        make_blog(tech, title="Python tips")
        make_blog(tech, excerpt="all about python")
        make_blog(tech, content="<p>We love PYTHON</p>")
        make_blog(tech, title="Unrelated")
        make_blog(tech, title="Python draft", is_published=False, published_at=None)

        result = blog_service.search_blogs(test_session, "python")
        assert result["total"] == 3


class TestCreateBlog:
    """Tests for blog creation rules."""

    def test_content_and_title_sanitized(self, test_session: Session, make_blog_type):
        tech = make_blog_type("Technology")
        blog = blog_service.create_blog(
            test_session,
            _blog_payload(tech.type_id, title="<b>Safe</b> title", content="<script>alert(1)</script>Hello"),
        )

        assert blog.content == "Hello"
        assert blog.title == "Safe title"

    def test_slug_derived_from_title(self, test_session: Session, make_blog_type):
        tech = make_blog_type("Technology")
        blog = blog_service.create_blog(test_session, _blog_payload(tech.type_id, title="Hello, World!"))
        assert blog.slug == "hello-world"

    def test_explicit_slug_lowercased(self, test_session: Session, make_blog_type):
        tech = make_blog_type("Technology")
        blog = blog_service.create_blog(test_session, _blog_payload(tech.type_id, slug="My-Post"))
        assert blog.slug == "my-post"

    def test_read_time_estimated(self, test_session: Session, make_blog_type):
        tech = make_blog_type("Technology")
        content = " ".join(["word"] * 400)
        blog = blog_service.create_blog(test_session, _blog_payload(tech.type_id, content=content))
        assert blog.read_time == 2

    def test_explicit_read_time_kept(self, test_session: Session, make_blog_type):
        tech = make_blog_type("Technology")
        blog = blog_service.create_blog(test_session, _blog_payload(tech.type_id, read_time=7))
        assert blog.read_time == 7

    def test_published_at_only_when_published(self, test_session: Session, make_blog_type):
        tech = make_blog_type("Technology")
        draft = blog_service.create_blog(test_session, _blog_payload(tech.type_id, slug="draft"))
        live = blog_service.create_blog(test_session, _blog_payload(tech.type_id, slug="live", is_published=True))

        assert draft.published_at is None
        assert live.published_at is not None
        assert draft.view_count == 0
        assert draft.blog_id != live.blog_id

    def test_duplicate_slug_rejected(self, test_session: Session, make_blog_type):
        tech = make_blog_type("Technology")
        blog_service.create_blog(test_session, _blog_payload(tech.type_id, slug="same"))
        with pytest.raises(IntegrityError):
            blog_service.create_blog(test_session, _blog_payload(tech.type_id, slug="same"))
        test_session.rollback()


class TestUpdateBlog:
    """Tests for partial updates."""

    def test_publishing_stamps_published_at_once(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        blog = make_blog(tech, is_published=False, published_at=None)

        blog = blog_service.update_blog(test_session, blog.blog_id, BlogUpdate(is_published=True))
        first = blog.published_at
        assert first is not None

        blog = blog_service.update_blog(test_session, blog.blog_id, BlogUpdate(title="Renamed"))
        assert blog.published_at == first
        assert blog.title == "Renamed"

    def test_content_change_recomputes_read_time(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        blog = make_blog(tech)

        blog = blog_service.update_blog(
            test_session, blog.blog_id, BlogUpdate(content=" ".join(["word"] * 600))
        )
        assert blog.read_time == 3

    def test_unsent_fields_untouched(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        blog = make_blog(tech, author="Ann", tags=["a", "b"])

        blog = blog_service.update_blog(test_session, blog.blog_id, BlogUpdate(excerpt="New excerpt"))

        assert blog.author == "Ann"
        assert blog.tags == ["a", "b"]
        assert blog.excerpt == "New excerpt"

    def test_missing_blog(self, test_session: Session):
        with pytest.raises(NotFound):
            blog_service.update_blog(test_session, "missing", BlogUpdate(title="x"))

    def test_empty_update_rejected(self):
        with pytest.raises(ValueError):
            BlogUpdate()


class TestReads:
    """Tests for single-blog reads and view counting."""

    def test_public_read_counts_view(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        blog = make_blog(tech)

        blog_service.get_blog(test_session, blog.blog_id)
        blog = blog_service.get_blog(test_session, blog.blog_id)

        assert blog.view_count == 2

    def test_admin_read_does_not_count(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        blog = make_blog(tech)

        blog = blog_service.get_blog(test_session, blog.blog_id, admin=True)
        assert blog.view_count == 0

    def test_draft_only_visible_to_admin(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        draft = make_blog(tech, is_published=False, published_at=None)

        assert blog_service.get_blog(test_session, draft.blog_id) is None
        assert blog_service.get_blog(test_session, draft.blog_id, admin=True) is not None

    def test_by_slug_case_insensitive(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        make_blog(tech, slug="my-post")

        blog = blog_service.get_blog_by_slug(test_session, "My-Post")
        assert blog is not None
        assert blog.view_count == 1

    def test_deleted_blog_not_found(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        blog = make_blog(tech)
        blog_service.delete_blog(test_session, blog.blog_id)

        assert blog_service.get_blog(test_session, blog.blog_id, admin=True) is None
        with pytest.raises(NotFound):
            blog_service.delete_blog(test_session, blog.blog_id)


class TestBlogTypes:
    """Tests for category management."""

    def test_create_and_list(self, test_session: Session):
        blog_service.create_blog_type(test_session, BlogTypeCreate(name="Technology", slug="Technology"))
        blog_service.create_blog_type(test_session, BlogTypeCreate(name="Art", slug="art", is_active=False))

        types = blog_service.get_blog_types(test_session)
        assert [t.slug for t in types] == ["technology"]

    def test_update(self, test_session: Session, make_blog_type):
        tech = make_blog_type("Technology")
        updated = blog_service.update_blog_type(test_session, tech.type_id, BlogTypeUpdate(description="New"))
        assert updated.description == "New"
        assert updated.name == "Technology"

    def test_update_missing(self, test_session: Session):
        with pytest.raises(NotFound):
            blog_service.update_blog_type(test_session, "missing", BlogTypeUpdate(name="x"))

    def test_delete_cascades_to_blogs(self, test_session: Session, make_blog_type, make_blog):
        tech = make_blog_type("Technology")
        life = make_blog_type("Lifestyle")
        first = make_blog(tech)
        second = make_blog(tech, is_published=False, published_at=None)
        other = make_blog(life)

        deleted, blog_ids = blog_service.delete_blog_type(test_session, tech.type_id)

        assert deleted is True
        assert sorted(blog_ids) == sorted([first.blog_id, second.blog_id])
        for blog_id in blog_ids:
            stored = base.find_one(test_session, Blog, Blog.blog_id == blog_id)
            assert stored.is_deleted is True
            assert stored.deleted_at is not None
        assert blog_dao.get_by_blog_id(test_session, other.blog_id) is not None
        assert blog_type_dao.get_by_type_id(test_session, tech.type_id) is None

    def test_delete_twice(self, test_session: Session, make_blog_type):
        tech = make_blog_type("Technology")
        assert blog_service.delete_blog_type(test_session, tech.type_id) == (True, [])
        assert blog_service.delete_blog_type(test_session, tech.type_id) == (False, [])


class TestTimestamps:
    """Tests for record timestamps."""

    def test_utcnow_is_timezone_aware(self):
        assert utcnow().tzinfo is timezone.utc

    def test_insert_and_update_stamp_times(self, test_session: Session, make_blog_type):
        tech = make_blog_type("Technology")

        blog = blog_service.create_blog(test_session, _blog_payload(tech.type_id, is_published=True))
        assert blog.created_at is not None
        assert blog.published_at is not None

        updated = blog_service.update_blog(test_session, blog.blog_id, BlogUpdate(title="Renamed"))
        assert updated.updated_at >= updated.created_at
