"""Core prompt assembly and quality evaluation for Prompt Builder.

Updates:
  v0.4.1 - 2026-10-19 - Keep core.critique bound to the submodule rather than its function.
  v0.4.0 - 2026-10-14 - Export preset library and editing helpers.
  v0.3.0 - 2026-10-12 - Export shareable-link codec.
  v0.2.0 - 2026-10-10 - Export checklist and critique engine.
  v0.1.0 - 2026-10-08 - Surface the prompt assembler.
"""

from models.preset import Preset
from models.prompt_state import (
    PromptExample,
    PromptState,
    PromptStateTypeError,
    default_prompt_state,
    merge_state,
)

from .assembler import AssembledPrompt, assemble, render_prompt
from .checklist import CheckResult, checklist
from .critique import Critique, CritiqueEngine
from .editing import (
    add_example,
    combined_constraints_text,
    remove_example,
    remove_variable,
    set_variable,
    split_constraints_text,
    update_example,
    update_field,
)
from .exceptions import (
    PresetError,
    PresetNotFoundError,
    PresetStorageError,
    PromptBuilderError,
    PromptShareError,
    PromptStateDecodeError,
)
from .presets import (
    PresetLibrary,
    builtin_presets,
    export_preset_library,
    load_preset_library,
)
from .sharing import (
    build_share_url,
    decode_prompt_state,
    encode_prompt_state,
    state_from_share_url,
)

__all__ = [
    "AssembledPrompt",
    "CheckResult",
    "Critique",
    "CritiqueEngine",
    "Preset",
    "PresetError",
    "PresetLibrary",
    "PresetNotFoundError",
    "PresetStorageError",
    "PromptBuilderError",
    "PromptExample",
    "PromptShareError",
    "PromptState",
    "PromptStateDecodeError",
    "PromptStateTypeError",
    "add_example",
    "assemble",
    "build_share_url",
    "builtin_presets",
    "checklist",
    "combined_constraints_text",
    "decode_prompt_state",
    "default_prompt_state",
    "encode_prompt_state",
    "export_preset_library",
    "load_preset_library",
    "merge_state",
    "remove_example",
    "remove_variable",
    "render_prompt",
    "set_variable",
    "split_constraints_text",
    "state_from_share_url",
    "update_example",
    "update_field",
]
