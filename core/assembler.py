"""Deterministic prompt assembly from authoring fields.

Updates:
  v0.2.0 - 2026-10-11 - Expose render_prompt so checks reuse the substitution pass.
  v0.1.0 - 2026-10-08 - Render ordered sections with example blocks and variables.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from models.prompt_state import PromptExample, PromptState

from .templating import SectionRenderer, substitute_variables

logger = logging.getLogger(__name__)

EXAMPLES_SECTION: Final[str] = "examples"

# (field name, header title) in render order.
SECTION_ORDER: Final[tuple[tuple[str, str], ...]] = (
    ("role", "Role"),
    ("goal", "Goal"),
    ("audience", "Audience"),
    ("context", "Context"),
    ("inputs", "Inputs"),
    (EXAMPLES_SECTION, "Examples"),
    ("steps", "Steps"),
    ("style", "Style"),
    ("output_format", "Output Format"),
    ("constraints", "Constraints"),
    ("guardrails", "Guardrails"),
    ("rubric", "Rubric"),
)

_RENDERER = SectionRenderer()


@dataclass(frozen=True, slots=True)
class AssembledPrompt:
    """Rendered prompt text plus the placeholders left unresolved."""

    text: str
    sections: tuple[str, ...]
    unresolved_variables: tuple[str, ...]


def _render_examples(examples: Sequence[PromptExample]) -> str:
    blocks: list[str] = []
    for example in examples:
        if example.is_blank:
            continue
        blocks.append(
            _RENDERER.render_example(
                len(blocks) + 1,
                example.input.strip(),
                example.output.strip(),
            )
        )
    return "\n\n".join(blocks)


def render_prompt(state: PromptState) -> AssembledPrompt:
    """Assemble ``state`` and report which sections and placeholders were seen."""
    rendered: list[str] = []
    titles: list[str] = []
    for field_name, title in SECTION_ORDER:
        if field_name == EXAMPLES_SECTION:
            body = _render_examples(state.examples)
        else:
            body = getattr(state, field_name).strip()
        if not body:
            continue
        rendered.append(_RENDERER.render_section(title, body))
        titles.append(title)

    substitution = substitute_variables("\n\n".join(rendered), state.variables)
    text = substitution.text.strip()
    logger.debug(
        "Assembled prompt",
        extra={
            "section_count": len(titles),
            "length": len(text),
            "unresolved_count": len(substitution.unresolved),
        },
    )
    return AssembledPrompt(
        text=text,
        sections=tuple(titles),
        unresolved_variables=substitution.unresolved,
    )


def assemble(state: PromptState) -> str:
    """Return the final prompt text for ``state``."""
    return render_prompt(state).text


__all__ = ["AssembledPrompt", "SECTION_ORDER", "assemble", "render_prompt"]
