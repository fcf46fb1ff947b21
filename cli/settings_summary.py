"""Printable summaries for Quote Widget configuration.

Updates:
  v0.1.1 - 2026-09-15 - Report which preference channel backend is active.
  v0.1.0 - 2026-09-05 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .utils import describe_path, mask_dsn

if TYPE_CHECKING:
    from config import QuoteWidgetSettings


def settings_summary_lines(settings: QuoteWidgetSettings) -> list[str]:
    """Return the summary as lines so callers can print or log them."""
    channel = "redis" if settings.redis_dsn else "sqlite"
    return [
        "Quote Widget configuration",
        "==========================",
        f"App group: {settings.app_group}",
        "Shared container: "
        + describe_path(settings.shared_container_path, expect_directory=True),
        f"Quote database: {describe_path(settings.db_path, expect_directory=False)}",
        f"Preference channel: {channel}",
        "Preference file: "
        + describe_path(settings.preferences_path, expect_directory=False),
        f"Redis DSN: {mask_dsn(settings.redis_dsn)}",
        f"Seed sample quotes: {'yes' if settings.seed_sample_quotes else 'no'}",
    ]


def print_settings_summary(settings: QuoteWidgetSettings) -> None:
    """Emit a readable summary of core configuration and health checks."""
    for line in settings_summary_lines(settings):
        print(line)
