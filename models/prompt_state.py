"""Prompt builder state data model definitions.

Updates:
  v0.2.0 - 2026-10-12 - Add starter defaults and patch merging for critique rewrites.
  v0.1.1 - 2026-10-08 - Reject blank and colliding variable names at construction.
  v0.1.0 - 2026-10-06 - Introduce PromptState and PromptExample dataclasses.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Final


class PromptStateTypeError(TypeError):
    """Raised when a prompt state is built from values of the wrong type."""


TEXT_FIELDS: Final[tuple[str, ...]] = (
    "goal",
    "role",
    "audience",
    "context",
    "inputs",
    "constraints",
    "output_format",
    "style",
    "steps",
    "guardrails",
    "rubric",
)

# Python attribute name -> record (wire) key used by shared links and preset files.
RECORD_KEYS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "goal": "goal",
        "role": "role",
        "audience": "audience",
        "context": "context",
        "inputs": "inputs",
        "constraints": "constraints",
        "output_format": "outputFormat",
        "style": "style",
        "steps": "steps",
        "examples": "examples",
        "guardrails": "guardrails",
        "rubric": "rubric",
        "variables": "variables",
    }
)
_ATTRIBUTE_NAMES: Final[Mapping[str, str]] = MappingProxyType(
    {record_key: name for name, record_key in RECORD_KEYS.items()}
)


def _ensure_text(name: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise PromptStateTypeError(f"'{name}' must be text, got {type(value).__name__}")
    return value


@dataclass(frozen=True, slots=True)
class PromptExample:
    """Single few-shot input/output pair."""

    input: str = ""
    output: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "input", _ensure_text("examples.input", self.input))
        object.__setattr__(self, "output", _ensure_text("examples.output", self.output))

    @property
    def is_blank(self) -> bool:
        """Return True when both sides are empty or whitespace-only."""
        return not self.input.strip() and not self.output.strip()

    def to_record(self) -> dict[str, str]:
        return {"input": self.input, "output": self.output}

    @classmethod
    def from_record(cls, data: Any) -> PromptExample:
        if isinstance(data, PromptExample):
            return data
        if not isinstance(data, Mapping):
            raise PromptStateTypeError("examples entries must be objects with input/output")
        return cls(input=data.get("input", ""), output=data.get("output", ""))


def _normalise_examples(items: Any) -> tuple[PromptExample, ...]:
    if items is None:
        return ()
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Iterable):
        raise PromptStateTypeError("'examples' must be a sequence of input/output pairs")
    return tuple(PromptExample.from_record(item) for item in items)


def _normalise_variables(value: Any) -> Mapping[str, str]:
    if value is None:
        return MappingProxyType({})
    if not isinstance(value, Mapping):
        raise PromptStateTypeError("'variables' must be a mapping of names to text")
    cleaned: dict[str, str] = {}
    for raw_key, raw_value in value.items():
        if not isinstance(raw_key, str):
            raise PromptStateTypeError("variable names must be text")
        key = raw_key.strip()
        if not key:
            raise PromptStateTypeError("variable names must not be empty")
        if key in cleaned:
            raise PromptStateTypeError(f"duplicate variable name '{key}'")
        cleaned[key] = _ensure_text(f"variables.{key}", raw_value)
    return MappingProxyType(cleaned)


@dataclass(frozen=True, slots=True)
class PromptState:
    """Complete set of authoring fields describing a prompt under construction.

    Instances are immutable: editing produces a new state. ``examples`` is kept as
    a tuple and ``variables`` as a read-only mapping so a state handed to the
    assembler, checklist, or critique engine can never be changed underneath them.
    """

    goal: str = ""
    role: str = ""
    audience: str = ""
    context: str = ""
    inputs: str = ""
    constraints: str = ""
    output_format: str = ""
    style: str = ""
    steps: str = ""
    examples: tuple[PromptExample, ...] = ()
    guardrails: str = ""
    rubric: str = ""
    variables: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        for name in TEXT_FIELDS:
            object.__setattr__(self, name, _ensure_text(name, getattr(self, name)))
        object.__setattr__(self, "examples", _normalise_examples(self.examples))
        object.__setattr__(self, "variables", _normalise_variables(self.variables))

    def to_record(self) -> dict[str, Any]:
        """Return a JSON-ready mapping using the shared camelCase keys."""
        record: dict[str, Any] = {}
        for name, record_key in RECORD_KEYS.items():
            value = getattr(self, name)
            if name == "examples":
                record[record_key] = [example.to_record() for example in value]
            elif name == "variables":
                record[record_key] = dict(value)
            else:
                record[record_key] = value
        return record

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> PromptState:
        """Hydrate a state from a record, filling absent fields with defaults."""
        if not isinstance(data, Mapping):
            raise PromptStateTypeError("prompt state records must be objects")
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _resolve_field_name(key)
            if name is None:
                continue
            kwargs[name] = value
        return cls(**kwargs)


def _resolve_field_name(key: Any) -> str | None:
    if not isinstance(key, str):
        return None
    if key in RECORD_KEYS:
        return key
    return _ATTRIBUTE_NAMES.get(key)


_FIELD_NAMES: Final[frozenset[str]] = frozenset(item.name for item in fields(PromptState))


def merge_state(state: PromptState, patch: Mapping[str, Any] | None) -> PromptState:
    """Return ``{**state, **patch}`` as a new state.

    Patch keys may use attribute names (``output_format``) or record keys
    (``outputFormat``). Unknown keys raise :class:`PromptStateTypeError`.
    """
    if not patch:
        return state
    changes: dict[str, Any] = {}
    for key, value in patch.items():
        name = _resolve_field_name(key)
        if name is None or name not in _FIELD_NAMES:
            raise PromptStateTypeError(f"unknown prompt state field '{key}'")
        changes[name] = value
    return replace(state, **changes)


def default_prompt_state() -> PromptState:
    """Return the starter state offered to a new authoring session."""
    return PromptState(
        role="You are a senior expert specialized in this task.",
        constraints="Be precise. Cite assumptions. Ask clarifying questions if needed.",
        output_format="Return a final answer AND a concise bullet summary.",
        style="Clear, direct, and structured. Prefer numbered steps and bullet points.",
        steps="1) Analyze 2) Plan 3) Execute 4) Validate 5) Summarize",
        guardrails=(
            "Do not fabricate facts. State uncertainties. "
            "Refuse out-of-scope or harmful requests."
        ),
        rubric="The answer is useful, correct, complete, concise, and reproducible.",
    )


__all__ = [
    "PromptExample",
    "PromptState",
    "PromptStateTypeError",
    "RECORD_KEYS",
    "TEXT_FIELDS",
    "default_prompt_state",
    "merge_state",
]
