"""Data models for Prompt Builder.

Updates: v0.2.0 - 2026-10-09 - Export Preset dataclass.
Updates: v0.1.0 - 2026-10-06 - Export PromptState and PromptExample dataclasses.
"""

from .preset import Preset, new_preset_id
from .prompt_state import (
    PromptExample,
    PromptState,
    PromptStateTypeError,
    default_prompt_state,
    merge_state,
)

__all__ = [
    "Preset",
    "PromptExample",
    "PromptState",
    "PromptStateTypeError",
    "default_prompt_state",
    "merge_state",
    "new_preset_id",
]
