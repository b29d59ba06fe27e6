"""Ticket ordering."""

from __future__ import annotations

from collections.abc import Iterable

from candoo.domain.entities import Ticket


def sort_tickets(tickets: Iterable[Ticket]) -> list[Ticket]:
    """Most recently updated first.

    ``sorted`` is stable even with ``reverse=True``, so tickets sharing an
    ``updated_at`` keep their input order and the result is idempotent.
    """
    return sorted(tickets, key=lambda t: t.updated_at, reverse=True)
