"""CLI command handlers for Quote Widget.

Exit codes: 0 success, 4 quote not found, 5 invalid input, 6 storage failure.

Updates:
  v0.2.1 - 2026-10-20 - Exit with the storage code when listing fails; log reload events.
  v0.2.0 - 2026-09-16 - Add widget rendering command.
  v0.1.0 - 2026-09-05 - Add quote CRUD, search, pin, and refresh handlers.
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core import (
    PreferenceStorageError,
    QuoteEventKind,
    QuoteStorageError,
    QuoteValidationError,
)

from .utils import format_quote, format_quote_row, parse_quote_id, print_and_log

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core import QuoteWidgetServices

CommandHandler = Callable[["QuoteWidgetServices", argparse.Namespace, logging.Logger], int]

EXIT_NOT_FOUND = 4
EXIT_INVALID_INPUT = 5
EXIT_STORAGE_FAILURE = 6


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler


def _log_widget_reload(services: QuoteWidgetServices, logger: logging.Logger) -> None:
    """Log the most recent widget reload request as JSON for the widget host."""
    reloads = [
        event for event in services.events.history() if event.kind is QuoteEventKind.WIDGET_RELOAD
    ]
    if reloads:
        logger.info("Widget reload requested: %s", json.dumps(reloads[-1].to_dict()))


def run_list(
    services: QuoteWidgetServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        quotes = services.store.fetch_all(getattr(args, "search", "") or "")
    except QuoteStorageError as exc:
        print_and_log(logger, logging.ERROR, f"Failed to list quotes: {exc}")
        return EXIT_STORAGE_FAILURE
    if not quotes:
        print("No quotes found.")
        return 0
    for quote in quotes:
        print(format_quote_row(quote))
    logger.debug("Listed %d quote(s)", len(quotes))
    return 0


def run_add(
    services: QuoteWidgetServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    model = services.list_model()
    try:
        quote = model.add(args.text, args.author)
    except QuoteValidationError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_INVALID_INPUT
    except QuoteStorageError as exc:
        print_and_log(logger, logging.ERROR, f"Failed to add quote: {exc}")
        return EXIT_STORAGE_FAILURE
    finally:
        model.close()
    print_and_log(logger, logging.INFO, f"Added quote {quote.id}")
    return 0


def run_edit(
    services: QuoteWidgetServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    model = services.list_model()
    try:
        quote_id = parse_quote_id(args.quote_id)
        updated = model.update(quote_id, args.text, args.author)
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_INVALID_INPUT
    except QuoteStorageError as exc:
        print_and_log(logger, logging.ERROR, f"Failed to update quote: {exc}")
        return EXIT_STORAGE_FAILURE
    finally:
        model.close()
    if not updated:
        print_and_log(logger, logging.WARNING, f"Quote {quote_id} not found")
        return EXIT_NOT_FOUND
    print_and_log(logger, logging.INFO, f"Updated quote {quote_id}")
    return 0


def run_delete(
    services: QuoteWidgetServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    model = services.list_model()
    try:
        quote_id = parse_quote_id(args.quote_id)
        model.arm_delete(quote_id)
        deleted = model.confirm_delete(quote_id)
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_INVALID_INPUT
    except QuoteStorageError as exc:
        print_and_log(logger, logging.ERROR, f"Failed to delete quote: {exc}")
        return EXIT_STORAGE_FAILURE
    finally:
        model.close()
    if not deleted:
        print_and_log(logger, logging.WARNING, f"Quote {quote_id} not found")
        return EXIT_NOT_FOUND
    print_and_log(logger, logging.INFO, f"Deleted quote {quote_id}")
    return 0


def run_pin(
    services: QuoteWidgetServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        quote_id = parse_quote_id(args.quote_id)
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_INVALID_INPUT
    try:
        if services.store.get(quote_id) is None:
            print_and_log(logger, logging.WARNING, f"Quote {quote_id} not found")
            return EXIT_NOT_FOUND
        services.actions.pin(quote_id)
    except (QuoteStorageError, PreferenceStorageError) as exc:
        print_and_log(logger, logging.ERROR, f"Failed to pin quote: {exc}")
        return EXIT_STORAGE_FAILURE
    _log_widget_reload(services, logger)
    print(f"Pinned quote {quote_id} to the widget")
    return 0


def run_refresh(
    services: QuoteWidgetServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        services.actions.refresh()
    except PreferenceStorageError as exc:
        print_and_log(logger, logging.ERROR, f"Failed to refresh widget: {exc}")
        return EXIT_STORAGE_FAILURE
    _log_widget_reload(services, logger)
    print("Widget refresh requested; pinned quote cleared.")
    return 0


def run_widget(
    services: QuoteWidgetServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    mode = getattr(args, "mode", "timeline")
    provider = services.timeline
    if mode == "placeholder":
        print(format_quote(provider.placeholder().quote))
        return 0
    if mode == "snapshot":
        print(format_quote(provider.snapshot().quote))
        return 0
    timeline = provider.timeline()
    for entry in timeline.entries:
        print(format_quote(entry.quote))
    print(f"\nNext refresh: {timeline.refresh_after.isoformat()}")
    logger.debug("Rendered widget timeline", extra={"refresh_after": str(timeline.refresh_after)})
    return 0


COMMAND_SPECS: dict[str, CommandSpec] = {
    "list": CommandSpec(run_list),
    "add": CommandSpec(run_add),
    "edit": CommandSpec(run_edit),
    "delete": CommandSpec(run_delete),
    "pin": CommandSpec(run_pin),
    "refresh": CommandSpec(run_refresh),
    "widget": CommandSpec(run_widget),
}


__all__ = ["COMMAND_SPECS", "CommandSpec"]
