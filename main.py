"""Application entry point for Quote Widget.

Updates:
  v0.2.0 - 2026-09-16 - Dispatch widget rendering alongside quote commands.
  v0.1.0 - 2026-09-05 - Wire settings, services, and CLI commands.
"""

from __future__ import annotations

import logging

from cli.commands import COMMAND_SPECS
from cli.parser import build_parser
from cli.runtime import setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import QuoteWidgetError, build_services

EXIT_SETTINGS_FAILURE = 2
EXIT_SERVICES_FAILURE = 3


def main(argv: list[str] | None = None) -> int:
    """Entrypoint that wires settings, services, and CLI commands."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.logging_config)

    logger = logging.getLogger("quote_widget.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        cause = exc.__cause__
        logger.error("Failed to load settings: %s%s", exc, f" ({cause})" if cause else "")
        return EXIT_SETTINGS_FAILURE

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    spec = COMMAND_SPECS.get(getattr(args, "command", None) or "")
    if spec is None:
        parser.print_help()
        return 0

    try:
        services = build_services(settings)
    except QuoteWidgetError as exc:
        logger.error("Failed to initialise services: %s", exc)
        return EXIT_SERVICES_FAILURE

    return spec.handler(services, args, logger)


if __name__ == "__main__":
    raise SystemExit(main())
