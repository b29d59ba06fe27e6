"""Workflow column rules: ordering, lookup, initial and done columns.

A project's columns are totally ordered by ``position``. The first column
is where new tickets land; a column whose name is one of the configured
*done* names marks its tickets as closed.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from uuid import UUID

from candoo.domain.entities import WorkflowColumn
from candoo.domain.errors import EmptyBoardError

DEFAULT_DONE_COLUMN_NAMES: tuple[str, ...] = ("done",)
DEFAULT_COLUMN_NAMES: tuple[str, ...] = ("Backlog", "To Do", "In Progress", "Done")


def sort_columns(cols: Iterable[WorkflowColumn]) -> list[WorkflowColumn]:
    """Order columns ascending by position; ties keep their input order."""
    return sorted(cols, key=lambda c: c.position)


def find_column(cols: Iterable[WorkflowColumn], column_id: UUID) -> WorkflowColumn | None:
    for col in cols:
        if col.id == column_id:
            return col
    return None


def get_initial_column(cols: Iterable[WorkflowColumn]) -> WorkflowColumn:
    """Return the lowest-positioned column.

    Raises:
        EmptyBoardError: If *cols* is empty. Project creation guarantees
            at least one column, so this signals an inconsistent snapshot.
    """
    ordered = sort_columns(cols)
    if not ordered:
        raise EmptyBoardError("Project has no workflow columns")
    return ordered[0]


def columns_for_project(cols: Iterable[WorkflowColumn], project_id: UUID) -> list[WorkflowColumn]:
    """Keep only columns that belong to *project_id*, in input order."""
    return [c for c in cols if c.project_id == project_id]


def is_done_column(
    column: WorkflowColumn,
    done_names: Collection[str] = DEFAULT_DONE_COLUMN_NAMES,
) -> bool:
    """Check whether *column* is a terminal column (case-insensitive name match)."""
    folded = {n.strip().casefold() for n in done_names}
    return column.name.strip().casefold() in folded
