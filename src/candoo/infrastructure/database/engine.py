"""Database engine setup for the activity log.

SQLAlchemy Core (not ORM): the activity log is append-only rows with no
identity map or relationship loading to benefit from.
"""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from candoo.infrastructure.database.schema import metadata


def create_db_engine(url: str) -> Engine:
    return create_engine(url, echo=False)


def init_database(url: str) -> Engine:
    """Create an engine for *url* and all tables.

    Idempotent, safe to call on an existing database.
    """
    engine = create_db_engine(url)
    metadata.create_all(engine)
    return engine
