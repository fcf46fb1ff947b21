"""Configuration helpers for Quote Widget.

Updates: v0.2.0 - 2026-09-08 - Expose settings loader and configuration error types.
Updates: v0.1.0 - 2026-09-02 - Package scaffold.
"""

from .settings import (
    CONFIG_JSON_ENV,
    DEFAULT_APP_GROUP,
    DEFAULT_DB_FILENAME,
    DEFAULT_PREFERENCES_FILENAME,
    DEFAULT_SHARED_CONTAINER_PATH,
    QuoteWidgetSettings,
    SettingsError,
    load_settings,
)

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
