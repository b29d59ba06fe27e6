"""Command layer: one pure function per state-changing operation.

Commands may import from the domain layer only. Each returns a
:class:`CommandResult` holding the new state and the activity events to
hand to the best-effort activity writer.
"""

from candoo.commands.create import (
    ColumnSpec,
    CreateProjectInput,
    CreateTicketInput,
    create_project,
    create_ticket,
    default_column_specs,
)
from candoo.commands.result import CommandResult
from candoo.commands.tagging import AddTagInput, RemoveTagInput, add_tag, remove_tag
from candoo.commands.update import (
    AssignTicketInput,
    UpdateTicketInput,
    assign_ticket,
    update_ticket,
)
from candoo.commands.workflow import (
    CloseTicketInput,
    MoveTicketInput,
    ReopenTicketInput,
    close_ticket,
    move_ticket,
    reopen_ticket,
)

__all__ = [
    "AddTagInput",
    "AssignTicketInput",
    "CloseTicketInput",
    "ColumnSpec",
    "CommandResult",
    "CreateProjectInput",
    "CreateTicketInput",
    "MoveTicketInput",
    "RemoveTagInput",
    "ReopenTicketInput",
    "UpdateTicketInput",
    "add_tag",
    "assign_ticket",
    "close_ticket",
    "create_project",
    "create_ticket",
    "default_column_specs",
    "move_ticket",
    "remove_tag",
    "reopen_ticket",
    "update_ticket",
]
