"""Creation commands: tickets and project boards.

Pipeline: VALIDATE → RESOLVE COLUMN → BUILD → RESPOND
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping, Sequence
from typing import Annotated, Any
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field, StringConstraints

from candoo.commands._base import InputTitle, command, load_columns, ticket_event
from candoo.commands.result import CommandResult
from candoo.domain.columns import (
    DEFAULT_COLUMN_NAMES,
    DEFAULT_DONE_COLUMN_NAMES,
    columns_for_project,
    find_column,
    get_initial_column,
    is_done_column,
)
from candoo.domain.entities import (
    Board,
    Description,
    Prefix,
    Project,
    Ticket,
    WorkflowColumn,
    validate_entity,
)
from candoo.domain.errors import InvalidColumnError, NotMemberError
from candoo.domain.events import EventType
from candoo.domain.tags import normalize_tags
from candoo.domain.ticket_keys import generate_ticket_key

InputName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CreateTicketInput(BaseModel):
    """New ticket request. ``id`` and ``number`` are allocated by the caller."""

    model_config = {"frozen": True, "extra": "forbid"}

    id: UUID
    number: int = Field(ge=1)
    title: InputTitle
    description: Description = ""
    status_column_id: UUID | None = None
    assignee_id: UUID | None = None
    assignee_is_member: bool = False
    reporter_id: UUID
    tags: list[str] = Field(default_factory=list)
    now: AwareDatetime


class ColumnSpec(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    id: UUID
    name: InputName


class CreateProjectInput(BaseModel):
    """New project request. Columns are listed in board order."""

    model_config = {"frozen": True, "extra": "forbid"}

    id: UUID
    org_id: UUID
    name: InputName
    prefix: Prefix
    columns: list[ColumnSpec] = Field(min_length=1)
    now: AwareDatetime


def default_column_specs(
    column_ids: Sequence[UUID],
    names: Sequence[str] = DEFAULT_COLUMN_NAMES,
) -> list[ColumnSpec]:
    """Pair caller-allocated *column_ids* with column *names*, in board order.

    Raises:
        ValueError: When the number of ids and names differ.
    """
    if len(column_ids) != len(names):
        msg = f"Expected {len(names)} column ids, got {len(column_ids)}"
        raise ValueError(msg)
    return [ColumnSpec(id=cid, name=name) for cid, name in zip(column_ids, names, strict=True)]


@command
def create_ticket(
    project: Project | Mapping[str, Any],
    columns: Iterable[WorkflowColumn | Mapping[str, Any]],
    data: CreateTicketInput | Mapping[str, Any],
    *,
    done_column_names: Collection[str] = DEFAULT_DONE_COLUMN_NAMES,
) -> CommandResult[Ticket]:
    """Create a ticket in *project*.

    The ticket starts in ``data.status_column_id`` when given, otherwise in
    the project's initial column. Starting in a done column creates the
    ticket closed.

    Raises:
        ValidationError: Malformed project, columns, or input.
        InvalidColumnError: Explicit column is unknown or in another project.
        EmptyBoardError: No explicit column and the project has no columns.
        NotMemberError: Assignee given without confirmed org membership.
    """
    data = validate_entity(CreateTicketInput, data)
    project = validate_entity(Project, project)
    cols = load_columns(columns)

    if data.status_column_id is not None:
        column = find_column(cols, data.status_column_id)
        if column is None or column.project_id != project.id:
            raise InvalidColumnError(
                "Starting column does not belong to this project",
                detail={"column_id": str(data.status_column_id)},
            )
    else:
        column = get_initial_column(columns_for_project(cols, project.id))

    if data.assignee_id is not None and not data.assignee_is_member:
        raise NotMemberError(
            "Assignee is not a member of the project's org",
            detail={"assignee_id": str(data.assignee_id)},
        )

    ticket = validate_entity(
        Ticket,
        {
            "id": data.id,
            "project_id": project.id,
            "number": data.number,
            "key": generate_ticket_key(project.prefix, data.number),
            "title": data.title,
            "description": data.description,
            "status_column_id": column.id,
            "assignee_id": data.assignee_id,
            "reporter_id": data.reporter_id,
            "tags": normalize_tags(data.tags),
            "created_at": data.now,
            "updated_at": data.now,
            "closed_at": data.now if is_done_column(column, done_column_names) else None,
        },
    )

    event = ticket_event(
        ticket,
        EventType.TICKET_CREATED,
        actor_id=data.reporter_id,
        now=data.now,
        org_id=project.org_id,
        payload={
            "key": ticket.key,
            "title": ticket.title,
            "status_column_id": str(column.id),
        },
    )
    return CommandResult[Ticket](op="create_ticket", data=ticket, events=[event])


def create_project(data: CreateProjectInput | Mapping[str, Any]) -> Board:
    """Create a project together with its workflow columns.

    Positions are assigned ``0..n-1`` in the order given, so the first
    column becomes the initial column. At least one column is required,
    which is what lets :func:`get_initial_column` assume a non-empty board.

    Projects are not ticket-scoped, so no activity events are produced.
    """
    data = validate_entity(CreateProjectInput, data)
    project = validate_entity(
        Project,
        {
            "id": data.id,
            "org_id": data.org_id,
            "name": data.name,
            "prefix": data.prefix,
            "created_at": data.now,
            "updated_at": data.now,
        },
    )
    columns = [
        {
            "id": column.id,
            "project_id": project.id,
            "name": column.name,
            "position": position,
            "created_at": data.now,
        }
        for position, column in enumerate(data.columns)
    ]
    return validate_entity(Board, {"project": project, "columns": columns})
