"""Activity events: immutable facts emitted by commands for the audit log.

A :class:`NewActivityEvent` has no identity until the persistence adapter
writes it; the written row is an :class:`ActivityEvent`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field


class EventType(StrEnum):
    """One event type per state-changing command."""

    TICKET_CREATED = "ticket_created"
    TICKET_UPDATED = "ticket_updated"
    TICKET_MOVED = "ticket_moved"
    TICKET_CLOSED = "ticket_closed"
    TICKET_REOPENED = "ticket_reopened"
    TICKET_ASSIGNED = "ticket_assigned"
    TAG_ADDED = "tag_added"
    TAG_REMOVED = "tag_removed"


class NewActivityEvent(BaseModel):
    """An emitted, not yet persisted, activity event.

    ``payload`` is JSON-ready: ids inside it are rendered as strings.
    ``org_id`` is only known to commands that receive the project.
    """

    model_config = {"frozen": True}

    org_id: UUID | None = None
    project_id: UUID
    ticket_id: UUID
    actor_id: UUID
    event_type: EventType
    payload: dict[str, Any] = Field(default_factory=dict)
    occurred_at: AwareDatetime


class ActivityEvent(NewActivityEvent):
    """A persisted activity event."""

    id: UUID
    created_at: AwareDatetime
