from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, cast

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.api import blog, cards, footer, landing, page
from app.core.config import Settings, settings as default_settings
from app.core.errors import init_sentry, register_exception_handlers
from app.core.logging_config import configure_logging, get_logger
from app.core.rate_limit import RateLimiter, build_rate_limiters
from app.db import build_engine, create_db_and_tables
from app.middleware.audit import AuditMiddleware
from app.seed import seed_default_data

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Everything request handlers share, built once per application."""

    settings: Settings
    engine: Engine
    rate_limiters: Dict[str, RateLimiter] = field(default_factory=dict)


@asynccontextmanager
async def lifespan(app: FastAPI):
    context: AppContext = app.state.context
    settings = context.settings

    logger.info("=" * 50)
    logger.info(f"{settings.PROJECT_NAME} starting", environment=settings.ENVIRONMENT, port=settings.PORT)
    logger.info("=" * 50)

    init_sentry(settings.SENTRY_DSN, environment=settings.ENVIRONMENT)
    create_db_and_tables(context.engine)

    if settings.SEED_DEFAULT_DATA:
        with Session(context.engine) as session:
            created = seed_default_data(session)
        logger.info("Default data seeding finished", **created)

    yield

    context.engine.dispose()
    logger.info(f"{settings.PROJECT_NAME} stopped")


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the API.

    Args:
        settings: Configuration (defaults to the environment-derived settings)
        engine: Database engine (defaults to one built from DATABASE_URL)
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL, json_output=settings.is_production)

    context = AppContext(
        settings=settings,
        engine=engine if engine is not None else build_engine(settings.DATABASE_URL),
        rate_limiters=build_rate_limiters(settings),
    )

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.context = context

    origins = settings.allowed_origins
    app.add_middleware(
        cast(Any, CORSMiddleware),
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(cast(Any, AuditMiddleware))

    register_exception_handlers(app, settings)

    app.include_router(blog.router, prefix="/blog", tags=["blog"])
    app.include_router(footer.router, prefix="/footer", tags=["footer"])
    app.include_router(cards.router, prefix="/cards", tags=["cards"])
    app.include_router(landing.router, prefix="/landing", tags=["landing"])
    app.include_router(page.router, prefix="/page", tags=["page"])

    @app.get("/health")
    def health():
        """Liveness check."""
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "environment": settings.ENVIRONMENT,
        }

    return app


app = create_app()
