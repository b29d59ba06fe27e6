"""Ticket filtering: AND-combined predicates over optional criteria.

A criterion applies only when it was explicitly set on the
:class:`TicketFilters` (tracked by pydantic's ``model_fields_set``). That
lets ``assignee_id=None`` mean "unassigned" while an omitted
``assignee_id`` matches every ticket.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from candoo.domain.entities import Ticket
from candoo.domain.tags import has_tag


class TicketFilters(BaseModel):
    """Filter criteria. Unset fields match everything."""

    model_config = {"frozen": True, "extra": "forbid"}

    status_column_id: UUID | None = None
    assignee_id: UUID | None = None
    tag: str | None = None
    tags: tuple[str, ...] = ()
    search: str | None = None
    closed: bool | None = None

    def is_set(self, name: str) -> bool:
        return name in self.model_fields_set


def matches_filters(ticket: Ticket, filters: TicketFilters) -> bool:
    """Return True when *ticket* satisfies every set criterion."""
    if filters.is_set("status_column_id") and ticket.status_column_id != filters.status_column_id:
        return False

    if filters.is_set("assignee_id") and ticket.assignee_id != filters.assignee_id:
        return False

    if filters.tag is not None and not has_tag(ticket.tags, filters.tag):
        return False

    if not all(has_tag(ticket.tags, t) for t in filters.tags):
        return False

    if filters.search:
        term = filters.search.casefold()
        if term not in ticket.title.casefold() and term not in ticket.description.casefold():
            return False

    if filters.closed is not None and ticket.is_closed != filters.closed:
        return False

    return True


def filter_tickets(tickets: Iterable[Ticket], filters: TicketFilters) -> list[Ticket]:
    """Select matching tickets, preserving relative order."""
    return [t for t in tickets if matches_filters(t, filters)]


def merge_filters(*filters: TicketFilters) -> TicketFilters:
    """Layer filter specs; later specs win per field.

    Only explicitly set fields take part, so a UI default survives unless
    the user override names the same field.
    """
    merged: dict[str, Any] = {}
    for layer in filters:
        for name in layer.model_fields_set:
            merged[name] = getattr(layer, name)
    return TicketFilters(**merged)
