"""Locating and parsing ``candoo.toml``.

Lookup order: the ``CANDOO_CONFIG`` environment variable, then the nearest
``candoo.toml`` in *start* or one of its parents.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "candoo.toml"
CONFIG_ENV_VAR = "CANDOO_CONFIG"


class InvalidConfigError(ValueError):
    """A config file is missing, unreadable, or does not hold valid settings."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


def find_config(
    start: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the config file that applies to *start* (default: cwd).

    A relative ``CANDOO_CONFIG`` is resolved against *start*. The variable
    names a file explicitly, so pointing it at nothing is an error rather
    than a silent fall back to defaults.

    Raises:
        InvalidConfigError: ``CANDOO_CONFIG`` is set but names no file.
    """
    env = os.environ if env is None else env
    base = (start or Path.cwd()).resolve()

    override = env.get(CONFIG_ENV_VAR, "").strip()
    if override:
        path = (base / Path(override).expanduser()).resolve()
        if not path.is_file():
            msg = f"{CONFIG_ENV_VAR} points to {path}, which is not a file"
            raise InvalidConfigError(msg, path=path)
        return path

    for directory in (base, *base.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        InvalidConfigError: The file cannot be read or is not valid TOML.
    """
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        msg = f"Cannot read {path}: {exc.strerror or exc}"
        raise InvalidConfigError(msg, path=path) from exc
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise InvalidConfigError(msg, path=path) from exc
