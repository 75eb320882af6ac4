"""
Test fixtures for the marketing CMS tests.

Provides an in-memory database, an app wired to it, and factories for
common records.
"""

from typing import Any, Callable, Dict, Generator, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import app.models  # noqa: F401  (registers every table)
from app.core.config import Settings
from app.dao import blog as blog_dao
from app.dao import blog_type as blog_type_dao
from app.main import create_app
from app.models.base import utcnow
from app.models.blog import Blog
from app.models.blog_type import BlogType

# Use in-memory SQLite for tests (fast, isolated)
TEST_DATABASE_URL = "sqlite:///:memory:"


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "ENVIRONMENT": "test",
        "DATABASE_URL": TEST_DATABASE_URL,
        "SEED_DEFAULT_DATA": False,
        "SENTRY_DSN": "",
        "CORS_ORIGINS": "*",
        "JWT_SECRET": "test-secret-key-for-signing-tokens-0123456789",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(scope="function")
def test_engine():
    """Create a test database engine with in-memory SQLite."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Generator[Session, None, None]:
    """Provide a test database session."""
    with Session(test_engine) as session:
        yield session


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def test_app(test_engine, test_settings) -> FastAPI:
    """App bound to the test engine. Each test gets fresh rate limiters."""
    return create_app(settings=test_settings, engine=test_engine)


@pytest.fixture
def client(test_app) -> TestClient:
    return TestClient(test_app)


@pytest.fixture
def make_blog_type(test_session: Session) -> Callable[..., BlogType]:
    def factory(name: str = "Technology", slug: Optional[str] = None, **extra: Any) -> BlogType:
        data = {"name": name, "slug": slug or name.lower(), "description": "", "is_active": True}
        data.update(extra)
        return blog_type_dao.create_blog_type(test_session, data)

    return factory


@pytest.fixture
def make_blog(test_session: Session) -> Callable[..., Blog]:
    counter = {"n": 0}

    def factory(blog_type: BlogType, **extra: Any) -> Blog:
        counter["n"] += 1
        n = counter["n"]
        data = {
            "title": f"Post {n}",
            "slug": f"post-{n}",
            "content": f"<p>Body of post {n}</p>",
            "excerpt": f"Excerpt {n}",
            "author": "Jane Smith",
            "type_id": blog_type.type_id,
            "tags": ["news"],
            "is_published": True,
            "published_at": utcnow(),
            "read_time": 1,
        }
        data.update(extra)
        return blog_dao.create_blog(test_session, data)

    return factory


@pytest.fixture
def make_client(test_engine) -> Callable[..., TestClient]:
    """Build a client for an app with overridden settings (e.g. tight quotas)."""

    def factory(**overrides: Any) -> TestClient:
        return TestClient(create_app(settings=make_settings(**overrides), engine=test_engine))

    return factory
