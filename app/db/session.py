from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
import logging
import time

from app.core.config import settings
from app.core.exceptions import RequestTimeoutError
from app.db.upsert import SUPPORTED_DIALECTS

logger = logging.getLogger("app")

# Check if DATABASE_URL is properly set
if not settings.DATABASE_URL:
    logger.error("DATABASE_URL is not set or empty!")
    raise ValueError("DATABASE_URL environment variable is required")

IS_SQLITE = settings.DATABASE_URL.startswith("sqlite")

try:
    if IS_SQLITE:
        # Sync endpoints run in a threadpool; connections cross threads
        engine = create_engine(
            settings.DATABASE_URL,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(
            settings.DATABASE_URL,
            pool_pre_ping=True,  # Check connection before using from pool
            pool_recycle=3600,   # Recycle connections after 1 hour
        )
    if engine.dialect.name not in SUPPORTED_DIALECTS:
        raise ValueError(
            f"Unsupported DATABASE_URL dialect '{engine.dialect.name}'; "
            f"use one of: {', '.join(SUPPORTED_DIALECTS)}"
        )
    logger.info("Database engine created successfully")
except Exception as e:
    logger.error(f"Failed to create database engine: {e}")
    raise

if IS_SQLITE:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Create session factory for database interactions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all SQLAlchemy models
Base = declarative_base()


@event.listens_for(SessionLocal, "before_commit")
def _refuse_late_commit(session):
    """A request past its deadline must not commit; the caller rolls back"""
    deadline = session.info.get("deadline")
    if deadline is not None and time.monotonic() > deadline:
        logger.warning("Commit refused: request deadline exceeded")
        raise RequestTimeoutError()


# Database session dependency for FastAPI
def get_db(request: Request):
    db = SessionLocal()
    deadline = getattr(request.state, "deadline", None)
    if deadline is None:
        deadline = time.monotonic() + settings.REQUEST_TIMEOUT_SECONDS
    db.info["deadline"] = deadline
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

# get_db() hands every request its own session with a commit deadline.
# Anything raised while the request is handled rolls the open transaction back.
