"""Application entry point for Prompt Builder.

Updates:
  v0.2.0 - 2026-10-15 - Dispatch assemble, checklist, critique, share, and presets commands.
  v0.1.0 - 2026-10-13 - Wire settings and logging for the CLI.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cli.commands import COMMAND_SPECS, dispatch
from cli.parser import build_parser
from cli.runtime import setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings

EXIT_CONFIG_ERROR = 2


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, logging, and CLI commands."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.logging_config, verbose=args.verbose)

    logger = logging.getLogger("prompt_builder.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        logger.error("Failed to load settings: %s", exc)
        return EXIT_CONFIG_ERROR

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    spec = COMMAND_SPECS.get(args.command) if args.command else None
    if spec is None:
        parser.print_help()
        return 0
    return dispatch(spec, settings, args, logger)


if __name__ == "__main__":
    raise SystemExit(main())
