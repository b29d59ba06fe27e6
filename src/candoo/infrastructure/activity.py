"""Best-effort activity-log writer.

Called after the primary entity mutation has been committed. Each event is
inserted in its own transaction; a failed insert is logged and skipped.

INVARIANT: Activity-write failures are logged, never raised. They must not
roll back or retry the primary mutation.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

import structlog
from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from candoo.config.models import ActivityConfig
from candoo.domain.entities import validate_entity
from candoo.domain.events import ActivityEvent, NewActivityEvent
from candoo.infrastructure.database.engine import init_database
from candoo.infrastructure.database.schema import activity_events

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def event_row(event: NewActivityEvent, *, event_id: UUID, created_at: datetime) -> dict[str, Any]:
    """Flatten *event* into an ``activity_events`` row.

    Timestamps are stored as UTC ISO-8601 text so that ordering by the
    column matches ordering by instant.
    """
    return {
        "id": str(event_id),
        "org_id": None if event.org_id is None else str(event.org_id),
        "project_id": str(event.project_id),
        "ticket_id": str(event.ticket_id),
        "actor_id": str(event.actor_id),
        "event_type": str(event.event_type),
        "payload": json.dumps(event.payload, sort_keys=True),
        "occurred_at": event.occurred_at.astimezone(UTC).isoformat(),
        "created_at": created_at.astimezone(UTC).isoformat(),
    }


def persist_activity_events(
    engine: Engine,
    events: Iterable[NewActivityEvent],
    *,
    id_factory: Callable[[], UUID] = uuid4,
    clock: Callable[[], datetime] = _utcnow,
) -> int:
    """Append *events* to the activity log.

    Returns the number of events that failed to persist. Callers must not
    assume all-or-nothing durability.
    """
    failures = 0
    for event in events:
        try:
            row = event_row(event, event_id=id_factory(), created_at=clock())
            with engine.begin() as conn:
                conn.execute(insert(activity_events).values(**row))
        except Exception:
            failures += 1
            logger.error(
                "activity.persist_failed",
                event_type=str(event.event_type),
                ticket_id=str(event.ticket_id),
                exc_info=True,
            )
    if failures:
        logger.warning("activity.persist_incomplete", failed=failures)
    return failures


def list_ticket_activity(engine: Engine, ticket_id: UUID) -> list[ActivityEvent]:
    """Read a ticket's activity back, oldest first, validated as ActivityEvent."""
    with engine.connect() as conn:
        rows = conn.execute(
            select(activity_events)
            .where(activity_events.c.ticket_id == str(ticket_id))
            .order_by(activity_events.c.occurred_at, activity_events.c.created_at)
        ).fetchall()

    return [
        validate_entity(ActivityEvent, {**row._asdict(), "payload": json.loads(row.payload)})
        for row in rows
    ]


class ActivityWriter:
    """Activity persistence collaborator handed to transport handlers.

    Parameters:
        engine: Engine with the ``activity_events`` table.
        enabled: When False, :meth:`write` drops events (``[activity] enabled``).
    """

    def __init__(self, engine: Engine, *, enabled: bool = True) -> None:
        self._engine = engine
        self._enabled = enabled

    @classmethod
    def from_config(cls, config: ActivityConfig) -> ActivityWriter:
        """Build a writer from the [activity] section, creating the table if needed."""
        return cls(init_database(config.database_url), enabled=config.enabled)

    def write(self, events: Iterable[NewActivityEvent]) -> int:
        """Persist *events*; returns the failure count."""
        if not self._enabled:
            logger.debug("activity.disabled")
            return 0
        return persist_activity_events(self._engine, events)
