from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Marketing CMS API"
    ENVIRONMENT: str = "development"  # "development", "production" or "test"
    PORT: int = 5050

    # SQLite for local development, PostgreSQL in production
    DATABASE_URL: str = "sqlite:///./marketing_cms.db"

    # Comma separated; "*" allows any origin
    CORS_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"

    # Token verification (auth helpers are available but not wired to routes)
    JWT_SECRET: str = "change-this-secret-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days

    # Rate limiting: requests per client address per window
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_GENERAL: int = 1000
    RATE_LIMIT_BLOG_WRITE: int = 50
    RATE_LIMIT_BLOG_TYPE_WRITE: int = 20
    RATE_LIMIT_LANDING_PAGE: int = 100
    RATE_LIMIT_PAGE_CONTENT: int = 100

    # Insert default landing page / blog types / sample blogs into empty tables
    SEED_DEFAULT_DATA: bool = False

    SENTRY_DSN: str = ""

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def allowed_origins(self) -> List[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",")]
        return [o for o in origins if o]


settings = Settings()
