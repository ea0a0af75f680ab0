"""State transitions used by editors that build prompts field by field.

Every helper returns a new :class:`PromptState`; the input is never modified.

Updates:
  v0.1.1 - 2026-10-13 - Split combined constraints and guardrails text.
  v0.1.0 - 2026-10-11 - Add field, example, and variable editing helpers.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from models.prompt_state import PromptExample, PromptState, PromptStateTypeError, merge_state


def update_field(state: PromptState, name: str, value: Any) -> PromptState:
    """Return ``state`` with one field replaced."""
    return merge_state(state, {name: value})


def add_example(state: PromptState, example_input: str = "", example_output: str = "") -> PromptState:
    """Append an example (blank by default) to the end of the sequence."""
    example = PromptExample(input=example_input, output=example_output)
    return replace(state, examples=(*state.examples, example))


def _check_index(state: PromptState, index: int) -> None:
    if not 0 <= index < len(state.examples):
        raise IndexError(f"example index {index} out of range")


def update_example(
    state: PromptState,
    index: int,
    *,
    example_input: str | None = None,
    example_output: str | None = None,
) -> PromptState:
    """Replace the input and/or output of the example at ``index``."""
    _check_index(state, index)
    current = state.examples[index]
    updated = PromptExample(
        input=current.input if example_input is None else example_input,
        output=current.output if example_output is None else example_output,
    )
    examples = list(state.examples)
    examples[index] = updated
    return replace(state, examples=tuple(examples))


def remove_example(state: PromptState, index: int) -> PromptState:
    """Drop the example at ``index``, keeping the order of the others."""
    _check_index(state, index)
    return replace(
        state,
        examples=tuple(example for position, example in enumerate(state.examples) if position != index),
    )


def set_variable(state: PromptState, name: str, value: str) -> PromptState:
    """Define or overwrite a variable; the name is trimmed."""
    key = (name or "").strip()
    if not key:
        raise PromptStateTypeError("variable names must not be empty")
    variables = dict(state.variables)
    variables[key] = value
    return replace(state, variables=variables)


def remove_variable(state: PromptState, name: str) -> PromptState:
    """Remove a variable if it is defined."""
    if name not in state.variables:
        return state
    variables = {key: value for key, value in state.variables.items() if key != name}
    return replace(state, variables=variables)


def combined_constraints_text(state: PromptState) -> str:
    """Return constraints and guardrails as one editable block."""
    if state.guardrails:
        return f"{state.constraints}\n{state.guardrails}"
    return state.constraints


def split_constraints_text(state: PromptState, text: str) -> PromptState:
    """Store the first line as constraints and the remaining lines as guardrails."""
    constraints, _, guardrails = (text or "").partition("\n")
    return replace(state, constraints=constraints, guardrails=guardrails)


__all__ = [
    "add_example",
    "combined_constraints_text",
    "remove_example",
    "remove_variable",
    "set_variable",
    "split_constraints_text",
    "update_example",
    "update_field",
]
