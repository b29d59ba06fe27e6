"""Activity-log database engine and schema via SQLAlchemy Core."""

from candoo.infrastructure.database.engine import create_db_engine, init_database
from candoo.infrastructure.database.schema import activity_events, metadata

__all__ = [
    "activity_events",
    "create_db_engine",
    "init_database",
    "metadata",
]
