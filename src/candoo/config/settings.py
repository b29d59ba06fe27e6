"""CandooSettings: the configuration an embedding application runs with.

Sources, highest priority first:

  1. keyword overrides passed to :meth:`CandooSettings.load`
  2. ``CANDOO_*`` environment variables (``__`` separates nested sections)
  3. ``candoo.toml``, explicit or discovered
  4. defaults on the section models
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

import pydantic
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from candoo.config.discovery import InvalidConfigError, find_config, read_config
from candoo.config.models import ActivityConfig, BoardConfig

# Parsed candoo.toml for the settings object currently being built.
_document: ContextVar[dict[str, Any] | None] = ContextVar("candoo_config_document", default=None)


class ConfigFileSource(PydanticBaseSettingsSource):
    """Settings source over an already-parsed ``candoo.toml`` document."""

    def __init__(self, settings_cls: type[BaseSettings], document: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._document = document

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._document.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        # Unknown keys pass through so that validation reports them.
        return dict(self._document)


class CandooSettings(BaseSettings):
    """Settings for applications embedding the candoo core.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        verbose: Enable debug logging for the ``candoo`` logger.
        log_json: Render log lines as JSON.
        board: Workflow column defaults (``[board]``).
        activity: Activity log persistence (``[activity]``).
    """

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "env_prefix": "CANDOO_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    verbose: bool = False
    log_json: bool = False

    board: BoardConfig = Field(default_factory=BoardConfig)
    activity: ActivityConfig = Field(default_factory=ActivityConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, ConfigFileSource(settings_cls, _document.get() or {}))

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> CandooSettings:
        """Build settings from *config_path*, or from the file found from *start*.

        Raises:
            InvalidConfigError: The chosen file is missing or unparsable, or the
                merged sources fail validation.
        """
        if config_path is not None:
            path: Path | None = Path(config_path).expanduser().resolve()
            if not path.is_file():
                msg = f"Config file {path} does not exist"
                raise InvalidConfigError(msg, path=path)
        else:
            path = find_config(start)

        document = read_config(path) if path is not None else {}
        token = _document.set(document)
        try:
            return cls(config_path=path, **overrides)
        except pydantic.ValidationError as exc:
            source = path or "settings"
            msg = f"Invalid configuration in {source}: {exc}"
            raise InvalidConfigError(msg, path=path) from exc
        finally:
            _document.reset(token)
