"""Runtime boot helpers for Prompt Builder CLI.

Updates:
  v0.1.0 - 2026-10-13 - Extract logging configuration helpers.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path


def setup_logging(logging_conf_path: Path | None, *, verbose: bool = False) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or Path("config/logging.conf")
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except (OSError, KeyError, ValueError) as exc:
            logging.basicConfig(level=logging.WARNING)
            logging.getLogger("prompt_builder.runtime").warning(
                "Ignoring invalid logging configuration %s: %s", path, exc
            )
            return
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
