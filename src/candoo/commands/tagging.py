"""Tag commands: idempotent add/remove on a ticket's tag list.

Adding a tag that is already present, or removing one that is absent,
returns the unchanged ticket and no events.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import field_validator

from candoo.commands._base import (
    CommandInput,
    command,
    evolve,
    load_ticket,
    noop,
    ticket_event,
)
from candoo.commands.result import CommandResult
from candoo.domain.entities import Ticket, validate_entity
from candoo.domain.events import EventType
from candoo.domain.tags import (
    TAG_MAX_LENGTH,
    add_tag_to_list,
    has_tag,
    normalize_tag,
    remove_tag_from_list,
)


class TagInput(CommandInput):
    """``tag`` is canonicalized on validation."""

    tag: str

    @field_validator("tag")
    @classmethod
    def _canonical(cls, value: str) -> str:
        normalized = normalize_tag(value)
        if not normalized:
            msg = "must not be blank"
            raise ValueError(msg)
        if len(normalized) > TAG_MAX_LENGTH:
            msg = f"must be at most {TAG_MAX_LENGTH} characters"
            raise ValueError(msg)
        return normalized


class AddTagInput(TagInput):
    pass


class RemoveTagInput(TagInput):
    pass


@command
def add_tag(
    ticket: Ticket | Mapping[str, Any],
    data: AddTagInput | Mapping[str, Any],
) -> CommandResult[Ticket]:
    data = validate_entity(AddTagInput, data)
    current = load_ticket(ticket, data.now)

    if has_tag(current.tags, data.tag):
        return noop("add_tag", current)

    updated = evolve(current, tags=add_tag_to_list(current.tags, data.tag), updated_at=data.now)
    event = ticket_event(
        updated,
        EventType.TAG_ADDED,
        actor_id=data.actor_id,
        now=data.now,
        payload={"tag": data.tag},
    )
    return CommandResult[Ticket](op="add_tag", data=updated, events=[event])


@command
def remove_tag(
    ticket: Ticket | Mapping[str, Any],
    data: RemoveTagInput | Mapping[str, Any],
) -> CommandResult[Ticket]:
    data = validate_entity(RemoveTagInput, data)
    current = load_ticket(ticket, data.now)

    if not has_tag(current.tags, data.tag):
        return noop("remove_tag", current)

    updated = evolve(
        current, tags=remove_tag_from_list(current.tags, data.tag), updated_at=data.now
    )
    event = ticket_event(
        updated,
        EventType.TAG_REMOVED,
        actor_id=data.actor_id,
        now=data.now,
        payload={"tag": data.tag},
    )
    return CommandResult[Ticket](op="remove_tag", data=updated, events=[event])
