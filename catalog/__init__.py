"""Built-in preset catalog resources for Prompt Builder.

Updates: v0.1.0 - 2026-10-10 - Provide packaged default preset library.
"""

from __future__ import annotations

from importlib.resources import files
from typing import Any


def builtin_presets_resource() -> Any:
    """Return a Traversable pointing to the packaged presets JSON file."""
    return files(__name__).joinpath("presets.json")


__all__ = ["builtin_presets_resource"]
