"""AppContext: what a transport builds once and hands to every handler.

It applies the logging settings on construction and opens the activity
database only when the first event needs writing, so handlers that never
change anything never touch storage.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import UUID

import structlog

from candoo.commands import ColumnSpec, CommandResult, default_column_specs
from candoo.config.logging import configure_logging
from candoo.config.settings import CandooSettings

if TYPE_CHECKING:
    from candoo.infrastructure.activity import ActivityWriter

logger = structlog.get_logger(__name__)


class AppContext:
    """Settings plus the collaborators derived from them."""

    def __init__(self, settings: CandooSettings) -> None:
        self.settings = settings
        self._activity: ActivityWriter | None = None
        configure_logging(settings)
        logger.debug(
            "context.ready",
            config_path=str(settings.config_path) if settings.config_path else None,
            activity_enabled=settings.activity.enabled,
        )

    @classmethod
    def load(cls, *, config_path: str | Path | None = None, **overrides: Any) -> AppContext:
        """Shortcut for ``AppContext(CandooSettings.load(...))``."""
        return cls(CandooSettings.load(config_path=config_path, **overrides))

    @property
    def activity(self) -> ActivityWriter:
        """The activity writer, created on first access."""
        if self._activity is None:
            from candoo.infrastructure.activity import ActivityWriter

            self._activity = ActivityWriter.from_config(self.settings.activity)
        return self._activity

    @property
    def done_column_names(self) -> tuple[str, ...]:
        """Column names that close a ticket, for the workflow commands."""
        return self.settings.board.done_column_names

    def column_specs(self, column_ids: Sequence[UUID]) -> list[ColumnSpec]:
        """Configured default columns paired with caller-allocated ids."""
        return default_column_specs(column_ids, self.settings.board.default_columns)

    def record(self, result: CommandResult[Any]) -> int:
        """Write *result*'s events to the activity log; returns the failure count."""
        if not result.changed:
            return 0
        return self.activity.write(result.events)
