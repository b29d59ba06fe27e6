"""SQLAlchemy Core table definitions for the activity log.

Ids are stored as canonical UUID strings and timestamps as ISO 8601 text
so the table reads the same on SQLite and Postgres.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, MetaData, Table, Text

metadata = MetaData()

activity_events = Table(
    "activity_events",
    metadata,
    Column("id", Text, primary_key=True),
    Column("org_id", Text),
    Column("project_id", Text, nullable=False),
    Column("ticket_id", Text, nullable=False),
    Column("actor_id", Text, nullable=False),
    Column("event_type", Text, nullable=False),
    Column("payload", Text, nullable=False),  # JSON object
    Column("occurred_at", Text, nullable=False),
    Column("created_at", Text, nullable=False),
    Index("ix_activity_events_ticket", "ticket_id", "occurred_at"),
)
