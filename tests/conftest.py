"""Shared pytest fixtures for candoo tests."""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

import pytest

from candoo.commands import create_project, create_ticket
from candoo.domain.entities import Board, Project, Ticket, WorkflowColumn

T0 = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's CANDOO_* environment out of settings."""
    for name in list(os.environ):
        if name.startswith("CANDOO_"):
            monkeypatch.delenv(name)


def _at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


@pytest.fixture
def at() -> Callable[[int], datetime]:
    """Injected clock: a fixed point *minutes* after the fixture epoch."""
    return _at


@pytest.fixture
def org_id() -> UUID:
    return uuid4()


@pytest.fixture
def actor_id() -> UUID:
    return uuid4()


@pytest.fixture
def board(org_id: UUID) -> Board:
    """ENG project with Backlog / In Progress / Done columns."""
    return create_project(
        {
            "id": uuid4(),
            "org_id": org_id,
            "name": "Engineering",
            "prefix": "ENG",
            "columns": [
                {"id": uuid4(), "name": "Backlog"},
                {"id": uuid4(), "name": "In Progress"},
                {"id": uuid4(), "name": "Done"},
            ],
            "now": T0,
        }
    )


@pytest.fixture
def project(board: Board) -> Project:
    return board.project


@pytest.fixture
def columns(board: Board) -> list[WorkflowColumn]:
    return list(board.columns)


@pytest.fixture
def column(columns: list[WorkflowColumn]) -> Callable[[str], WorkflowColumn]:
    """Look a fixture column up by name."""

    def _column(name: str) -> WorkflowColumn:
        return next(c for c in columns if c.name == name)

    return _column


@pytest.fixture
def other_board() -> Board:
    """A second project whose columns must never be usable by ENG tickets."""
    return create_project(
        {
            "id": uuid4(),
            "org_id": uuid4(),
            "name": "Operations",
            "prefix": "OPS",
            "columns": [{"id": uuid4(), "name": "Backlog"}],
            "now": T0,
        }
    )


@pytest.fixture
def make_ticket(
    project: Project, columns: list[WorkflowColumn], actor_id: UUID
) -> Callable[..., Ticket]:
    """Create tickets through the real command, numbering them sequentially."""
    counter = {"n": 0}

    def _make(title: str = "Fix bug", **overrides: Any) -> Ticket:
        counter["n"] += 1
        data: dict[str, Any] = {
            "id": uuid4(),
            "number": counter["n"],
            "title": title,
            "reporter_id": actor_id,
            "now": T0,
        }
        data.update(overrides)
        return create_ticket(project, columns, data).data

    return _make


@pytest.fixture
def ticket(make_ticket: Callable[..., Ticket]) -> Ticket:
    return make_ticket()
