"""Workflow commands: moving between columns, closing, reopening.

Closed-state policy: ``Ticket.closed_at`` is the single source of truth.

- ``close_ticket`` sets it and leaves the column alone.
- ``move_ticket`` derives it from the target column: entering a done
  column closes, landing anywhere else leaves the ticket open.
- ``reopen_ticket`` clears it and never leaves the ticket in a done column.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from typing import Any
from uuid import UUID

from candoo.commands._base import (
    CommandInput,
    command,
    evolve,
    load_columns,
    load_ticket,
    noop,
    ticket_event,
)
from candoo.commands.result import CommandResult
from candoo.domain.columns import (
    DEFAULT_DONE_COLUMN_NAMES,
    columns_for_project,
    find_column,
    get_initial_column,
    is_done_column,
)
from candoo.domain.entities import Ticket, WorkflowColumn, validate_entity
from candoo.domain.errors import AlreadyClosedError, InvalidColumnError, NotClosedError
from candoo.domain.events import EventType


class MoveTicketInput(CommandInput):
    to_column_id: UUID


class CloseTicketInput(CommandInput):
    pass


class ReopenTicketInput(CommandInput):
    """``to_column_id`` defaults to the current column, or the initial one
    when the ticket sits in a done column."""

    to_column_id: UUID | None = None


@command
def move_ticket(
    ticket: Ticket | Mapping[str, Any],
    columns: Iterable[WorkflowColumn | Mapping[str, Any]],
    data: MoveTicketInput | Mapping[str, Any],
    *,
    done_column_names: Collection[str] = DEFAULT_DONE_COLUMN_NAMES,
) -> CommandResult[Ticket]:
    """Move a ticket to another column of its project.

    Emits ``ticket_moved``, followed by ``ticket_closed`` or
    ``ticket_reopened`` when the move crosses the done boundary.

    Raises:
        InvalidColumnError: Target column unknown or in another project.
    """
    data = validate_entity(MoveTicketInput, data)
    current = load_ticket(ticket, data.now)
    target = _resolve_column(load_columns(columns), current, data.to_column_id)

    if target.id == current.status_column_id:
        return noop("move_ticket", current)

    if is_done_column(target, done_column_names):
        closed_at = current.closed_at or data.now
    else:
        closed_at = None

    updated = evolve(
        current,
        status_column_id=target.id,
        closed_at=closed_at,
        updated_at=data.now,
    )

    column_change = {"from": str(current.status_column_id), "to": str(target.id)}
    events = [
        ticket_event(
            updated,
            EventType.TICKET_MOVED,
            actor_id=data.actor_id,
            now=data.now,
            payload=column_change,
        )
    ]
    if not current.is_closed and updated.is_closed:
        events.append(
            ticket_event(
                updated,
                EventType.TICKET_CLOSED,
                actor_id=data.actor_id,
                now=data.now,
                payload={"status_column_id": str(target.id)},
            )
        )
    elif current.is_closed and not updated.is_closed:
        events.append(
            ticket_event(
                updated,
                EventType.TICKET_REOPENED,
                actor_id=data.actor_id,
                now=data.now,
                payload=column_change,
            )
        )
    return CommandResult[Ticket](op="move_ticket", data=updated, events=events)


@command
def close_ticket(
    ticket: Ticket | Mapping[str, Any],
    data: CloseTicketInput | Mapping[str, Any],
) -> CommandResult[Ticket]:
    """Mark a ticket closed.

    Raises:
        AlreadyClosedError: The ticket is already closed.
    """
    data = validate_entity(CloseTicketInput, data)
    current = load_ticket(ticket, data.now)

    if current.is_closed:
        raise AlreadyClosedError(
            f"Ticket {current.key} is already closed",
            detail={"ticket_id": str(current.id)},
        )

    updated = evolve(current, closed_at=data.now, updated_at=data.now)
    event = ticket_event(
        updated,
        EventType.TICKET_CLOSED,
        actor_id=data.actor_id,
        now=data.now,
        payload={"status_column_id": str(current.status_column_id)},
    )
    return CommandResult[Ticket](op="close_ticket", data=updated, events=[event])


@command
def reopen_ticket(
    ticket: Ticket | Mapping[str, Any],
    columns: Iterable[WorkflowColumn | Mapping[str, Any]],
    data: ReopenTicketInput | Mapping[str, Any],
    *,
    done_column_names: Collection[str] = DEFAULT_DONE_COLUMN_NAMES,
) -> CommandResult[Ticket]:
    """Reopen a closed ticket.

    Raises:
        NotClosedError: The ticket is not closed.
        InvalidColumnError: Target column unknown, in another project, or
            a done column.
        EmptyBoardError: No target given, the ticket sits in a done column,
            and the project has no columns to fall back to.
    """
    data = validate_entity(ReopenTicketInput, data)
    current = load_ticket(ticket, data.now)
    cols = load_columns(columns)

    if not current.is_closed:
        raise NotClosedError(
            f"Ticket {current.key} is not closed",
            detail={"ticket_id": str(current.id)},
        )

    if data.to_column_id is not None:
        target = _resolve_column(cols, current, data.to_column_id)
    else:
        here = find_column(cols, current.status_column_id)
        if here is not None and not is_done_column(here, done_column_names):
            target = here
        else:
            target = get_initial_column(columns_for_project(cols, current.project_id))

    if is_done_column(target, done_column_names):
        raise InvalidColumnError(
            "Cannot reopen a ticket into a done column",
            detail={"column_id": str(target.id)},
        )

    updated = evolve(
        current,
        status_column_id=target.id,
        closed_at=None,
        updated_at=data.now,
    )
    event = ticket_event(
        updated,
        EventType.TICKET_REOPENED,
        actor_id=data.actor_id,
        now=data.now,
        payload={"from": str(current.status_column_id), "to": str(target.id)},
    )
    return CommandResult[Ticket](op="reopen_ticket", data=updated, events=[event])


def _resolve_column(
    cols: list[WorkflowColumn], ticket: Ticket, column_id: UUID
) -> WorkflowColumn:
    """Find *column_id* and check it lives in the ticket's project."""
    column = find_column(cols, column_id)
    if column is None:
        raise InvalidColumnError(
            "Target column not found",
            detail={"column_id": str(column_id)},
        )
    if column.project_id != ticket.project_id:
        raise InvalidColumnError(
            "Target column belongs to a different project",
            detail={"column_id": str(column_id), "project_id": str(column.project_id)},
        )
    return column
