"""Printable summaries for Prompt Builder configuration.

Updates:
  v0.1.0 - 2026-10-14 - Render critique, preset, and share settings.
"""

from __future__ import annotations

from config import PromptBuilderSettings

from .utils import describe_path


def print_settings_summary(settings: PromptBuilderSettings) -> None:
    """Emit a readable summary of the resolved configuration."""
    lines = [
        "Prompt Builder configuration summary",
        "------------------------------------",
        f"Minimum goal length: {settings.min_goal_length}",
        f"Generic output formats: {', '.join(settings.generic_output_formats) or 'none'}",
        f"Preset library: {describe_path(settings.presets_path)}",
        f"Share base URL: {settings.share_base_url}",
    ]
    print("\n".join(lines))
