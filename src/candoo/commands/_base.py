"""Shared command plumbing: input base model, state helpers, @command.

Commands are pure: they never read the clock, never generate ids, and
never mutate what they are given. ``now`` and ``actor_id`` arrive on every
input model.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Annotated, Any, ParamSpec, TypeVar
from uuid import UUID

import structlog
from pydantic import AwareDatetime, BaseModel, StringConstraints

from candoo.commands.result import CommandResult
from candoo.domain.entities import TITLE_MAX_LENGTH, Ticket, WorkflowColumn, validate_entity
from candoo.domain.errors import DomainError, ValidationError
from candoo.domain.events import EventType, NewActivityEvent

logger = structlog.get_logger(__name__)

_P = ParamSpec("_P")
_T = TypeVar("_T")

InputTitle = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LENGTH)
]


class CommandInput(BaseModel):
    """Fields every ticket command input carries.

    Unknown fields are rejected so a patch can never smuggle in changes
    the command does not understand.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    actor_id: UUID
    now: AwareDatetime


# ── State helpers ────────────────────────────────────────────────────


def load_ticket(ticket: Ticket | Mapping[str, Any], now: datetime) -> Ticket:
    """Validate the current ticket snapshot and the injected clock against it."""
    current = validate_entity(Ticket, ticket)
    if now < current.updated_at:
        raise ValidationError.single(
            "now", "must not precede the ticket's updated_at", code="clock_regression"
        )
    return current


def load_columns(
    columns: Iterable[WorkflowColumn | Mapping[str, Any]],
) -> list[WorkflowColumn]:
    return [validate_entity(WorkflowColumn, c) for c in columns]


def evolve(ticket: Ticket, **changes: Any) -> Ticket:
    """Return a re-validated copy of *ticket* with *changes* applied.

    A change stamps a new ``updated_at``, which must be strictly later than
    the current one. No-ops never reach here, so an unchanged clock is only
    refused when something would actually be written.
    """
    updated_at = changes.get("updated_at")
    if updated_at is not None and updated_at <= ticket.updated_at:
        raise ValidationError.single(
            "now", "must be later than the ticket's updated_at", code="clock_regression"
        )
    return validate_entity(Ticket, {**ticket.model_dump(), **changes})


def ticket_event(
    ticket: Ticket,
    event_type: EventType,
    *,
    actor_id: UUID,
    now: datetime,
    payload: dict[str, Any] | None = None,
    org_id: UUID | None = None,
) -> NewActivityEvent:
    return NewActivityEvent(
        org_id=org_id,
        project_id=ticket.project_id,
        ticket_id=ticket.id,
        actor_id=actor_id,
        event_type=event_type,
        payload=payload or {},
        occurred_at=now,
    )


def noop(op: str, ticket: Ticket) -> CommandResult[Ticket]:
    """Result for a command that changes nothing."""
    return CommandResult[Ticket](op=op, data=ticket, events=[])


# ── @command decorator ───────────────────────────────────────────────


def command(func: Callable[_P, CommandResult[_T]]) -> Callable[_P, CommandResult[_T]]:
    """Decorator: log the outcome of a command at debug level.

    Domain errors are logged and re-raised unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> CommandResult[_T]:
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except DomainError as exc:
            logger.debug(
                "command.rejected",
                op=func.__name__,
                code=exc.code,
                reason=exc.message,
                duration_ms=_elapsed_ms(start),
            )
            raise

        logger.debug(
            "command.applied" if result.changed else "command.noop",
            op=result.op,
            events=[str(e.event_type) for e in result.events],
            duration_ms=_elapsed_ms(start),
        )
        return result

    return wrapper


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
