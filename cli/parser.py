"""Argument parser for the Quote Widget CLI.

Updates:
  v0.2.0 - 2026-09-16 - Add widget subcommand with placeholder/snapshot/timeline modes.
  v0.1.0 - 2026-09-05 - Add list/add/edit/delete/pin/refresh subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(description="Quote Widget command line")
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List quotes, newest first.")
    list_parser.add_argument(
        "--search",
        type=str,
        default="",
        help="Only show quotes whose text or author contains this (case/accent-insensitive).",
    )

    add_parser = subparsers.add_parser("add", help="Add a new quote.")
    add_parser.add_argument("text", type=str, help="Quote text.")
    add_parser.add_argument("author", type=str, help="Quote author.")

    edit_parser = subparsers.add_parser("edit", help="Replace the text and author of a quote.")
    edit_parser.add_argument("quote_id", type=str, help="Quote UUID.")
    edit_parser.add_argument("text", type=str, help="New quote text.")
    edit_parser.add_argument("author", type=str, help="New quote author.")

    delete_parser = subparsers.add_parser("delete", help="Delete a quote.")
    delete_parser.add_argument("quote_id", type=str, help="Quote UUID.")

    pin_parser = subparsers.add_parser("pin", help="Pin a quote to the widget.")
    pin_parser.add_argument("quote_id", type=str, help="Quote UUID.")

    subparsers.add_parser(
        "refresh",
        help="Clear the pinned quote and ask the widget to re-render.",
    )

    widget_parser = subparsers.add_parser("widget", help="Render what the widget would show.")
    widget_parser.add_argument(
        "--mode",
        choices=("placeholder", "snapshot", "timeline"),
        default="timeline",
        help="Widget request to simulate (default: timeline).",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments."""
    return build_parser().parse_args(argv)
