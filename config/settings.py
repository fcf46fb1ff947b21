"""Settings management utilities for Quote Widget configuration.

Updates:
  v0.2.1 - 2026-09-15 - Add optional Redis DSN for the shared preference channel.
  v0.2.0 - 2026-09-08 - Load JSON configuration ahead of environment variables.
  v0.1.0 - 2026-09-02 - Shared container, database, and seeding settings.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_APP_GROUP = "group.com.loranstudio.quotewidget"
DEFAULT_SHARED_CONTAINER_PATH = Path("data") / "shared"
DEFAULT_DB_FILENAME = "QuoteModel.sqlite"
DEFAULT_PREFERENCES_FILENAME = "preferences.sqlite"
CONFIG_JSON_ENV = "QUOTE_WIDGET_CONFIG_JSON"

_JSON_KEYS = (
    "app_group",
    "shared_container_path",
    "db_filename",
    "preferences_filename",
    "redis_dsn",
    "seed_sample_quotes",
)

logger = logging.getLogger("quote_widget.settings")


class SettingsError(Exception):
    """Raised when Quote Widget configuration cannot be loaded or validated."""


class QuoteWidgetSettings(BaseSettings):
    """Application configuration sourced from keyword overrides, JSON, and environment."""

    app_group: str = Field(
        default=DEFAULT_APP_GROUP,
        description="Identifier shared by the app and widget processes.",
    )
    shared_container_path: Path = Field(
        default=DEFAULT_SHARED_CONTAINER_PATH,
        validate_default=True,
        description="Directory both processes can read and write.",
    )
    db_filename: str = Field(default=DEFAULT_DB_FILENAME)
    preferences_filename: str = Field(default=DEFAULT_PREFERENCES_FILENAME)
    redis_dsn: str | None = Field(
        default=None,
        description="Store the preference channel in Redis instead of SQLite when set.",
    )
    seed_sample_quotes: bool = Field(
        default=True,
        description="Insert sample quotes the first time the collection is empty.",
    )

    model_config = SettingsConfigDict(
        env_prefix="QUOTE_WIDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def db_path(self) -> Path:
        return self.shared_container_path / self.db_filename

    @property
    def preferences_path(self) -> Path:
        return self.shared_container_path / self.preferences_filename

    @field_validator("shared_container_path", mode="before")
    def _normalise_path(cls, value: Any) -> Path:
        """Expand user-relative paths and coerce values to Path instances."""
        if value is None or str(value).strip() == "":
            raise ValueError("a filesystem path is required")
        return Path(str(value)).expanduser().resolve()

    @field_validator("app_group", "db_filename", "preferences_filename")
    def _require_text(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("value must not be empty")
        return stripped

    @field_validator("redis_dsn", mode="before")
    def _trim_redis_dsn(cls, value: str | None) -> str | None:
        """Normalise Redis DSN values by stripping whitespace and empty strings."""
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(app_group="...")).
            2. JSON configuration file.
            3. Environment variables.
            4. ``.env`` file.
            5. File secrets.
        """
        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv(CONFIG_JSON_ENV)
            if explicit_path:
                path = Path(explicit_path).expanduser()
                if not path.exists():
                    raise SettingsError(f"Configuration file not found: {path}")
            else:
                path = Path("config") / "config.json"
                if not path.exists():
                    return {}
            try:
                raw_contents = path.read_text(encoding="utf-8")
            except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                raise SettingsError(f"Unable to read configuration file: {path}") from exc
            try:
                data = json.loads(raw_contents)
            except json.JSONDecodeError as exc:
                raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
            if not isinstance(data, Mapping):
                raise SettingsError(f"Configuration file {path} must contain a JSON object")
            mapping_data = cast("Mapping[object, Any]", data)
            data_dict = {str(key): value for key, value in mapping_data.items()}
            unknown = sorted(key for key in data_dict if key not in _JSON_KEYS)
            if unknown:
                logger.warning(
                    "Ignoring unknown key(s) %s in configuration file %s",
                    ", ".join(unknown),
                    path,
                )
            return {key: data_dict[key] for key in _JSON_KEYS if key in data_dict}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> QuoteWidgetSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return QuoteWidgetSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid Quote Widget configuration") from exc


__all__ = [
    "CONFIG_JSON_ENV",
    "DEFAULT_APP_GROUP",
    "DEFAULT_DB_FILENAME",
    "DEFAULT_PREFERENCES_FILENAME",
    "DEFAULT_SHARED_CONTAINER_PATH",
    "QuoteWidgetSettings",
    "SettingsError",
    "load_settings",
]
