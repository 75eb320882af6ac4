"""
Create every table (and the live-row unique indexes) in DATABASE_URL.
Usage: python scripts/init_db.py
"""
from app.core.config import settings
from app.db import build_engine, create_db_and_tables

if __name__ == "__main__":
    engine = build_engine(settings.DATABASE_URL)
    print(f"Creating tables in {engine.url.render_as_string(hide_password=True)}...")
    create_db_and_tables(engine)
    print("Tables created successfully!")
