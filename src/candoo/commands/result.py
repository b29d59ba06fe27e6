"""CommandResult: the universal command contract.

INVARIANT: Every ticket command returns CommandResult. ``events`` is empty exactly
when the command was a true no-op, in which case ``data`` is the unchanged
input state.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from candoo.domain.events import NewActivityEvent

T = TypeVar("T")


class CommandResult(BaseModel, Generic[T]):
    """Resulting entity state plus the events describing what happened.

    Attributes:
        op: Name of the command (e.g. ``"move_ticket"``).
        data: The new entity state.
        events: Ordered activity events for the audit log.
    """

    model_config = {"frozen": True}

    op: str
    data: T
    events: list[NewActivityEvent] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.events)
