"""Field-level ticket commands: detail patches and assignment.

Pipeline: VALIDATE → DIFF → APPLY → RESPOND
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from candoo.commands._base import (
    CommandInput,
    InputTitle,
    command,
    evolve,
    load_ticket,
    noop,
    ticket_event,
)
from candoo.commands.result import CommandResult
from candoo.domain.entities import Description, Ticket, validate_entity
from candoo.domain.errors import NotMemberError
from candoo.domain.events import EventType

# Fields a detail patch may touch. Everything else goes through its own command.
PATCHABLE_FIELDS = ("title", "description")


class UpdateTicketInput(CommandInput):
    """Partial patch: omitted fields are left alone."""

    title: InputTitle | None = None
    description: Description | None = None


class AssignTicketInput(CommandInput):
    """``assignee_id=None`` unassigns.

    ``assignee_is_member`` is the caller's answer to "is this user a member
    of the ticket's org?"; the core never looks memberships up itself.
    """

    assignee_id: UUID | None
    assignee_is_member: bool = False


@command
def update_ticket(
    ticket: Ticket | Mapping[str, Any],
    data: UpdateTicketInput | Mapping[str, Any],
) -> CommandResult[Ticket]:
    """Apply a title/description patch.

    Only fields whose value actually differs count as changes; a patch that
    changes nothing is a no-op.
    """
    data = validate_entity(UpdateTicketInput, data)
    current = load_ticket(ticket, data.now)

    changes: dict[str, dict[str, str]] = {}
    for field in PATCHABLE_FIELDS:
        value = getattr(data, field)
        if value is not None and value != getattr(current, field):
            changes[field] = {"from": getattr(current, field), "to": value}

    if not changes:
        return noop("update_ticket", current)

    updated = evolve(
        current,
        **{field: diff["to"] for field, diff in changes.items()},
        updated_at=data.now,
    )
    event = ticket_event(
        updated,
        EventType.TICKET_UPDATED,
        actor_id=data.actor_id,
        now=data.now,
        payload={"changes": changes},
    )
    return CommandResult[Ticket](op="update_ticket", data=updated, events=[event])


@command
def assign_ticket(
    ticket: Ticket | Mapping[str, Any],
    data: AssignTicketInput | Mapping[str, Any],
) -> CommandResult[Ticket]:
    """Set or clear the assignee.

    Re-assigning the current assignee is a no-op and needs no membership
    confirmation.

    Raises:
        NotMemberError: A non-null assignee without confirmed membership.
    """
    data = validate_entity(AssignTicketInput, data)
    current = load_ticket(ticket, data.now)

    if current.assignee_id == data.assignee_id:
        return noop("assign_ticket", current)

    if data.assignee_id is not None and not data.assignee_is_member:
        raise NotMemberError(
            "Assignee is not a member of the ticket's org",
            detail={"assignee_id": str(data.assignee_id)},
        )

    updated = evolve(current, assignee_id=data.assignee_id, updated_at=data.now)
    event = ticket_event(
        updated,
        EventType.TICKET_ASSIGNED,
        actor_id=data.actor_id,
        now=data.now,
        payload={
            "from": _str_or_none(current.assignee_id),
            "to": _str_or_none(data.assignee_id),
        },
    )
    return CommandResult[Ticket](op="assign_ticket", data=updated, events=[event])


def _str_or_none(value: UUID | None) -> str | None:
    return None if value is None else str(value)
