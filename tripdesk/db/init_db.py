# tripdesk/db/init_db.py
"""Database initialization utilities."""
from sqlalchemy.engine import Engine

from tripdesk.core.logging import get_logger
from tripdesk.db.base import Base, import_models

logger = get_logger(__name__)


def init_db(bind: Engine) -> None:
    """
    Create any missing tables.

    Note: This is suitable for development/testing only.
    For production, manage the schema with migrations instead.
    """
    import_models()
    try:
        Base.metadata.create_all(bind=bind)
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise
    logger.info("Database tables ensured", extra={"tables": len(Base.metadata.tables)})


def drop_db(bind: Engine) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    import_models()
    Base.metadata.drop_all(bind=bind)
    logger.warning("All database tables dropped")
