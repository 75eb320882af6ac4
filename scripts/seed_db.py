"""
Insert the default landing page, blog types and sample blogs.
Each data set is skipped when its table already has rows.
Usage: python scripts/seed_db.py
"""
from sqlmodel import Session

from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db import build_engine, create_db_and_tables
from app.seed import seed_default_data


def seed_db():
    configure_logging(settings.LOG_LEVEL)
    engine = build_engine(settings.DATABASE_URL)
    create_db_and_tables(engine)

    with Session(engine) as session:
        created = seed_default_data(session)

    for name, count in created.items():
        status = f"{count} created" if count else "skipped (already present)"
        print(f"  {name}: {status}")
    print("Seeding complete.")


if __name__ == "__main__":
    seed_db()
