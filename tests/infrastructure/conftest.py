"""Fixtures for activity-log persistence tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from candoo.infrastructure.database.engine import init_database


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'activity.db'}"


@pytest.fixture
def db_engine(db_url: str) -> Generator[Engine]:
    """Initialized SQLite engine with the activity table created."""
    engine = init_database(db_url)
    try:
        yield engine
    finally:
        engine.dispose()
