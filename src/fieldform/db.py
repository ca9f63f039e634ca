"""Database initialization and operations."""

import logging
from pathlib import Path

from playhouse.pool import PooledSqliteDatabase

from .consts import DB_MAX_CONNECTIONS, DB_PRAGMAS, DB_STALE_TIMEOUT
from .models import Form, Submission, database_proxy

logger = logging.getLogger(__name__)

database = None


def init_db(db_path: str):
    """Initialize database connection pool."""
    global database

    db_file = Path(db_path)
    db_dir = db_file.parent
    if db_dir and not db_dir.exists():
        db_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created database directory: {db_dir}")

    database = PooledSqliteDatabase(
        db_path,
        max_connections=DB_MAX_CONNECTIONS,
        stale_timeout=DB_STALE_TIMEOUT,
        pragmas=DB_PRAGMAS,
        check_same_thread=False,
    )

    database_proxy.initialize(database)
    logger.info(f"Database connection pool initialized: {db_path}")


def create_tables():
    """Create database tables."""
    database.create_tables([Form, Submission], safe=True)
    logger.info("Database tables created")


def close_db():
    """Close database connection."""
    global database
    if database:
        database.close()
        logger.info("Database connection closed")


def connection_scope():
    """Hold one pooled connection for the duration of the wrapped call.

    Usable as a decorator or a context manager; the connection goes back to
    the pool on exit.
    """
    return database_proxy.connection_context()
