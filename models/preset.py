"""Preset data model definitions.

Updates: v0.1.0 - 2026-10-09 - Add Preset dataclass for named prompt state snapshots.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .prompt_state import PromptState, PromptStateTypeError


def new_preset_id() -> str:
    """Return a fresh identifier for a user-created preset."""
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class Preset:
    """Named, reusable snapshot of a prompt state."""

    id: str
    name: str
    state: PromptState

    def to_record(self) -> dict[str, Any]:
        """Return a mapping suitable for JSON or YAML export."""
        return {"id": self.id, "name": self.name, "state": self.state.to_record()}

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Preset:
        """Hydrate a Preset from a stored mapping."""
        if not isinstance(data, Mapping):
            raise PromptStateTypeError("preset entries must be objects")
        name = str(data.get("name") or "").strip()
        if not name:
            raise PromptStateTypeError("preset entries must include a name")
        state_value = data.get("state") or {}
        if not isinstance(state_value, Mapping):
            raise PromptStateTypeError(f"preset '{name}' state must be an object")
        return cls(
            id=str(data.get("id") or new_preset_id()),
            name=name,
            state=PromptState.from_record(state_value),
        )


__all__ = ["Preset", "new_preset_id"]
