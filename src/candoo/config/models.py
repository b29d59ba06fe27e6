"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, candoo.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from candoo.domain.columns import DEFAULT_COLUMN_NAMES, DEFAULT_DONE_COLUMN_NAMES


class BoardConfig(BaseModel):
    """[board] section."""

    model_config = {"frozen": True}

    default_columns: tuple[str, ...] = Field(default=DEFAULT_COLUMN_NAMES, min_length=1)
    done_column_names: tuple[str, ...] = DEFAULT_DONE_COLUMN_NAMES


class ActivityConfig(BaseModel):
    """[activity] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    database_url: str = "sqlite:///candoo.db"

