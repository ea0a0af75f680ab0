"""Configuration helpers for Prompt Builder.

Updates: v0.1.0 - 2026-10-12 - Expose settings loader and configuration error types.
"""

from .settings import PromptBuilderSettings, SettingsError, load_settings

__all__ = [
    "PromptBuilderSettings",
    "SettingsError",
    "load_settings",
]
