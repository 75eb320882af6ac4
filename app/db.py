from typing import Generator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

from app.core.logging_config import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the engine for ``database_url``. Nothing connects until first use."""
    if database_url.startswith("sqlite"):
        # Handlers run on the server's thread pool
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        echo=echo,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=300,
        pool_timeout=30,
    )


def get_session(request: Request) -> Generator[Session, None, None]:
    """One session per request, bound to the engine held by the app context."""
    with Session(request.app.state.context.engine) as session:
        yield session


def create_db_and_tables(engine: Engine) -> None:
    # Register every table on the metadata before creating
    import app.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ensured", url=engine.url.render_as_string(hide_password=True))
