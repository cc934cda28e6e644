import logging

from sqlalchemy import inspect

from app.db.session import engine, Base
# Registers every model on Base.metadata
import app.db.base  # noqa: F401

logger = logging.getLogger("app")


def create_all_tables() -> bool:
    try:
        inspector = inspect(engine)
        existing_tables = inspector.get_table_names()

        Base.metadata.create_all(bind=engine)

        new_tables = set(inspect(engine).get_table_names()) - set(existing_tables)
        if new_tables:
            logger.info(f"Created new tables: {new_tables}")

        return True
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        return False
