"""Argument parser for Prompt Builder CLI.

Updates:
  v0.2.0 - 2026-10-15 - Add preset export and strict checklist flags.
  v0.1.0 - 2026-10-13 - Add assemble, checklist, critique, share, and presets commands.
"""

from __future__ import annotations

import argparse
from pathlib import Path


def _add_state_source(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--state",
        type=Path,
        default=None,
        help="Prompt state file (.json, .yaml, or .yml).",
    )
    source.add_argument(
        "--share",
        default=None,
        help="Shared link or bare token produced by the share command.",
    )
    source.add_argument(
        "--preset",
        default=None,
        help="Identifier of a built-in or configured preset.",
    )
    source.add_argument(
        "--defaults",
        action="store_true",
        help="Start from the starter state (role, constraints, rubric pre-filled).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(
        prog="prompt-builder",
        description="Assemble structured prompts and review them against a quality rubric.",
    )
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Emit debug logs when no logging configuration file is present.",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    assemble_parser = subparsers.add_parser("assemble", help="Print the assembled prompt.")
    _add_state_source(assemble_parser)

    checklist_parser = subparsers.add_parser(
        "checklist",
        help="Print the pass/fail quality checklist.",
    )
    _add_state_source(checklist_parser)
    checklist_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any checklist item fails.",
    )
    checklist_parser.add_argument("--json", action="store_true", help="Emit JSON output.")

    critique_parser = subparsers.add_parser(
        "critique",
        help="Print improvement suggestions and the suggested rewrite.",
    )
    _add_state_source(critique_parser)
    critique_parser.add_argument(
        "--apply",
        action="store_true",
        help="Print the improved state (as JSON) instead of the suggestions.",
    )
    critique_parser.add_argument("--json", action="store_true", help="Emit JSON output.")

    share_parser = subparsers.add_parser("share", help="Print a shareable link for a state.")
    _add_state_source(share_parser)
    share_parser.add_argument(
        "--base-url",
        default=None,
        help="Override the configured share base URL.",
    )
    share_parser.add_argument(
        "--token-only",
        action="store_true",
        help="Print only the encoded token.",
    )

    presets_parser = subparsers.add_parser("presets", help="List or export available presets.")
    presets_parser.add_argument(
        "--export",
        type=Path,
        default=None,
        help="Write the preset library to this path (.json or .yaml).",
    )
    presets_parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default=None,
        help="Explicit export format (defaults based on file extension).",
    )

    return parser
