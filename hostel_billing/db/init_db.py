"""Database initialization utilities."""
from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from hostel_billing.core.logging import get_logger
from hostel_billing.db.base import Base
from hostel_billing.db.session import engine as default_engine

logger = get_logger(__name__)


def init_db(engine: Engine = None) -> None:
    """
    Create any missing tables.

    Note: This is suitable for development/testing only.
    For production, use migrations instead.
    """
    engine = engine or default_engine
    existing_tables = set(inspect(engine).get_table_names())
    Base.metadata.create_all(bind=engine)
    created = sorted(set(Base.metadata.tables) - existing_tables)
    if created:
        logger.info("Database tables created", extra={"tables": created})
    else:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")


def drop_db(engine: Engine = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    Base.metadata.drop_all(bind=engine or default_engine)
    logger.warning("All database tables dropped")
