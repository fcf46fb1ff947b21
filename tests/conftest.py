"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.1.1 - 2026-09-21 - Restore the quote_widget logger after CLI runs.
  v0.1.0 - 2026-09-06 - Isolate tests from developer QUOTE_WIDGET_* environment.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _isolate_quote_widget_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop QUOTE_WIDGET_* variables so local configuration never leaks into tests."""
    for name in list(os.environ):
        if name.upper().startswith("QUOTE_WIDGET_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_quote_widget_logger() -> Iterator[None]:
    """Undo file-based logging configuration applied by CLI tests."""
    logger = logging.getLogger("quote_widget")
    handlers = list(logger.handlers)
    propagate = logger.propagate
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.propagate = propagate
    logger.setLevel(level)
