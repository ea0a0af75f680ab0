"""CLI command handlers for Prompt Builder.

Updates:
  v0.2.0 - 2026-10-15 - Add preset export and strict checklist exit status.
  v0.1.0 - 2026-10-13 - Add assemble, checklist, critique, share, and presets handlers.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass

from config import PromptBuilderSettings
from core import (
    CritiqueEngine,
    PresetLibrary,
    PromptBuilderError,
    PromptState,
    assemble,
    build_share_url,
    builtin_presets,
    checklist,
    default_prompt_state,
    encode_prompt_state,
    export_preset_library,
    load_preset_library,
    state_from_share_url,
)

from .utils import dump_json, load_state_file, print_and_log, resolve_export_format

EXIT_OK = 0
EXIT_CHECKLIST_FAILED = 1
EXIT_INPUT_ERROR = 4

CommandHandler = Callable[[PromptBuilderSettings, argparse.Namespace, logging.Logger], int]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler


def load_library(settings: PromptBuilderSettings) -> PresetLibrary:
    """Return built-in presets extended with the configured preset file."""
    library = builtin_presets()
    if settings.presets_path is not None:
        library = library.extend(load_preset_library(settings.presets_path))
    return library


def resolve_state(settings: PromptBuilderSettings, args: argparse.Namespace) -> PromptState:
    """Return the prompt state selected by the command-line source flags."""
    if getattr(args, "state", None) is not None:
        return load_state_file(args.state)
    if getattr(args, "share", None):
        return state_from_share_url(args.share)
    if getattr(args, "preset", None):
        return load_library(settings).get(args.preset).state
    if getattr(args, "defaults", False):
        return default_prompt_state()
    raise ValueError("Select a prompt state with --state, --share, --preset, or --defaults.")


def _engine(settings: PromptBuilderSettings) -> CritiqueEngine:
    return CritiqueEngine(
        min_goal_length=settings.min_goal_length,
        generic_output_formats=frozenset(settings.generic_output_formats),
    )


def run_assemble(
    settings: PromptBuilderSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    state = resolve_state(settings, args)
    print(assemble(state))
    return EXIT_OK


def run_checklist(
    settings: PromptBuilderSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    state = resolve_state(settings, args)
    results = checklist(state)
    if getattr(args, "json", False):
        print(
            dump_json(
                [{"key": item.key, "label": item.label, "pass": item.passed} for item in results]
            )
        )
    else:
        for item in results:
            marker = "[x]" if item.passed else "[ ]"
            print(f"{marker} {item.label}")
    failed = [item.key for item in results if not item.passed]
    if failed:
        logger.info("Checklist failures: %s", ", ".join(failed))
    if failed and getattr(args, "strict", False):
        return EXIT_CHECKLIST_FAILED
    return EXIT_OK


def run_critique(
    settings: PromptBuilderSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    state = resolve_state(settings, args)
    result = _engine(settings).critique(state)
    if getattr(args, "apply", False):
        improved = result.apply(state) if result is not None else state
        print(dump_json(improved.to_record()))
        return EXIT_OK
    if getattr(args, "json", False):
        print(dump_json(result.to_record() if result is not None else None))
        return EXIT_OK
    if result is None:
        print("No suggestions: the prompt covers every critique rule.")
        return EXIT_OK
    print("Suggestions")
    print("-----------")
    for suggestion in result.suggestions:
        print(f"- {suggestion}")
    if result.rewrite is not None:
        print("")
        print("Suggested rewrite")
        print("-----------------")
        print(result.rewrite)
    return EXIT_OK


def run_share(
    settings: PromptBuilderSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    state = resolve_state(settings, args)
    if getattr(args, "token_only", False):
        print(encode_prompt_state(state))
        return EXIT_OK
    base_url = getattr(args, "base_url", None) or settings.share_base_url
    print(build_share_url(base_url, state))
    return EXIT_OK


def run_presets(
    settings: PromptBuilderSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    library = load_library(settings)
    export_path = getattr(args, "export", None)
    if export_path is not None:
        fmt = resolve_export_format(export_path, getattr(args, "format", None))
        resolved = export_preset_library(library, export_path, fmt=fmt)
        print_and_log(logger, logging.INFO, f"Preset library exported to {resolved} ({fmt})")
        return EXIT_OK
    for preset in library:
        print(f"{preset.id}\t{preset.name}")
    return EXIT_OK


def dispatch(
    spec: CommandSpec,
    settings: PromptBuilderSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    """Run *spec* and convert expected input failures into an exit status."""
    try:
        return spec.handler(settings, args, logger)
    except (PromptBuilderError, ValueError) as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_INPUT_ERROR


COMMAND_SPECS: dict[str, CommandSpec] = {
    "assemble": CommandSpec(run_assemble),
    "checklist": CommandSpec(run_checklist),
    "critique": CommandSpec(run_critique),
    "share": CommandSpec(run_share),
    "presets": CommandSpec(run_presets),
}


__all__ = ["COMMAND_SPECS", "CommandSpec", "dispatch", "load_library", "resolve_state"]
