"""Shared CLI utility functions for Prompt Builder commands.

Updates:
  v0.2.0 - 2026-10-15 - Load prompt states from JSON/YAML files and share tokens.
  v0.1.0 - 2026-10-13 - Extract stdout logging and path helpers.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from models.prompt_state import PromptState, PromptStateTypeError

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from logging import Logger


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def describe_path(path_value: object) -> str:
    """Return a human-friendly description of an optional file path."""
    if path_value is None:
        return "not set"
    resolved = Path(str(path_value)).expanduser()
    if resolved.is_file():
        return f"{resolved} (exists)"
    if resolved.exists():
        return f"{resolved} (exists but is not a file)"
    return f"{resolved} (missing)"


def resolve_export_format(path: Path, explicit_format: str | None) -> str:
    """Return an export format slug based on *path* or *explicit_format*."""
    if explicit_format:
        return explicit_format.lower()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return "yaml"
    return "json"


def load_state_file(path: Path) -> PromptState:
    """Read a prompt state record from a JSON or YAML file."""
    resolved = path.expanduser()
    try:
        content = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Unable to read {resolved}: {exc}") from exc
    try:
        if resolve_export_format(resolved, None) == "yaml":
            data: Any = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ValueError(f"Invalid prompt state file {resolved}: {exc}") from exc
    if data is None:
        return PromptState()
    try:
        return PromptState.from_record(data)
    except PromptStateTypeError as exc:
        raise ValueError(f"Invalid prompt state in {resolved}: {exc}") from exc


def dump_json(payload: object) -> str:
    """Return *payload* as indented JSON for terminal output."""
    return json.dumps(payload, ensure_ascii=False, indent=2)
