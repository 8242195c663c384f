"""
Database initialization and connection management.
"""

import logging
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from arcopersona.config import settings
from arcopersona.db.schema import Base

logger = logging.getLogger(__name__)

_engines = {}


def get_engine(database_url=None):
    """Get (and cache) a SQLAlchemy engine for the given URL."""
    if database_url is None:
        database_url = settings.database_url

    if database_url in _engines:
        return _engines[database_url]

    connect_args = {}
    if database_url.startswith('sqlite'):
        connect_args['check_same_thread'] = False

    engine = create_engine(database_url, connect_args=connect_args, echo=False)

    if database_url.startswith('sqlite'):
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    _engines[database_url] = engine
    return engine


def get_session(engine=None):
    """Get SQLAlchemy session."""
    if engine is None:
        engine = get_engine()

    Session = sessionmaker(bind=engine)
    return Session()


def init_database(database_url=None, drop_existing=False):
    """
    Initialize database schema.

    Args:
        database_url: SQLAlchemy URL (uses configured URL if None)
        drop_existing: If True, drop all tables before creating

    Returns:
        SQLAlchemy engine
    """
    engine = get_engine(database_url)

    if drop_existing:
        logger.info("Dropping existing tables")
        Base.metadata.drop_all(engine)

    Base.metadata.create_all(engine)
    logger.info("Database initialized at: %s", database_url or settings.database_url)

    return engine


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database(drop_existing=True)
