"""Database initialization script."""

import logging

from sqlalchemy import Engine

from authcore.database import Base, engine
from authcore.models import Account, Session  # noqa: F401  (registers tables)

logger = logging.getLogger(__name__)


def create_tables(bind: Engine = engine) -> None:
    """Create the accounts and sessions tables if they do not exist."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=bind)
    logger.info("Tables created successfully")


def init_db() -> None:
    """Initialize the database."""
    create_tables()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
