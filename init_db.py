"""
Database initialization script.
This script creates all database tables.
Run this as: python init_db.py
"""

import logging
import sys

from sqlalchemy import inspect

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-init")

from app.core.config import settings
from app.db.init_db import create_all_tables
from app.db.session import engine

def init_db() -> bool:
    """Initialize the database by creating all tables."""
    logger.info(f"Initializing database at: {engine.url.render_as_string(hide_password=True)}")

    existing_tables = inspect(engine).get_table_names()
    logger.info(f"Existing tables: {existing_tables}")

    if not create_all_tables():
        return False

    tables_after = inspect(engine).get_table_names()
    new_tables = set(tables_after) - set(existing_tables)
    if new_tables:
        logger.info(f"Newly created tables: {new_tables}")
    else:
        logger.info("No new tables were created")
    return True

if __name__ == "__main__":
    logger.info(f"Starting database initialization ({settings.ENVIRONMENT})")
    if init_db():
        logger.info("Database initialization completed successfully")
    else:
        logger.error("Database initialization failed")
        sys.exit(1)
