"""Shared CLI utility functions for Quote Widget commands.

Updates:
  v0.1.0 - 2026-09-05 - Extract stdout logging, id parsing, and quote formatting.
"""

from __future__ import annotations

import textwrap
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from logging import Logger

    from models.quote_model import Quote
else:  # pragma: no cover - runtime placeholders for type-only imports
    Logger = Quote = Any


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def parse_quote_id(value: str) -> uuid.UUID:
    """Return *value* as a UUID, raising ValueError with a readable message."""
    try:
        return uuid.UUID(value.strip())
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid quote id: {value!r}") from None


def format_quote(quote: Quote, *, width: int = 72) -> str:
    """Return a multi-line, wrapped rendering of *quote*."""
    body = textwrap.fill(f"„{quote.text}”", width=width) if quote.text else ""
    lines = [body] if body else []
    if quote.author:
        lines.append(f"    — {quote.author}")
    return "\n".join(lines)


def format_quote_row(quote: Quote) -> str:
    """Return a one-line summary used by list output."""
    added = quote.date_added.astimezone().strftime("%Y-%m-%d %H:%M")
    author = quote.author or "?"
    return f"{quote.id}  {added}  {author}: {quote.text}"


def describe_path(path_value: object, *, expect_directory: bool) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    try:
        path = Path(path_value) if path_value is not None else None
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if expect_directory and not resolved.is_dir():
            return f"{resolved} (exists but is not a directory)"
        if not expect_directory and resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"
    return f"{resolved} (missing - created on demand)"


def mask_dsn(value: str | None) -> str:
    """Return a DSN with any password replaced by asterisks."""
    if not value:
        return "not set"
    scheme, sep, rest = value.partition("://")
    if not sep or "@" not in rest:
        return value
    credentials, host = rest.rsplit("@", 1)
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:****@{host}"
