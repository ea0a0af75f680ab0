"""Section layout rendering and ``{{name}}`` variable substitution.

Section layout uses a small Jinja2 environment; field text is passed in as
template *data*, so braces typed by the author are never evaluated by Jinja.
Variable substitution is a separate single-pass keyed lookup shared by the
assembler, the checklist, and the critique engine.

Updates:
  v0.3.1 - 2026-10-19 - Stop placeholder names at line breaks.
  v0.3.0 - 2026-10-11 - Report unresolved placeholders in first-appearance order.
  v0.2.0 - 2026-10-08 - Render sections and examples through Jinja2 templates.
  v0.1.0 - 2026-10-06 - Add literal placeholder substitution helpers.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

from jinja2 import Environment, StrictUndefined, Template

# ``{{name}}`` with the name taken verbatim; ``{{ name }}`` is a different key.
# Names never span lines.
PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{\{([^{}\r\n]+)\}\}")

SECTION_TEMPLATE: Final[str] = "### {{ title }}\n{{ body }}"
EXAMPLE_TEMPLATE: Final[str] = (
    "Example {{ index }}\nInput: {{ example_input }}\nOutput: {{ example_output }}"
)


@dataclass(frozen=True, slots=True)
class SubstitutionResult:
    """Outcome of replacing placeholders in a block of text."""

    text: str
    unresolved: tuple[str, ...] = field(default_factory=tuple)


def substitute_variables(text: str, variables: Mapping[str, str]) -> SubstitutionResult:
    """Replace every ``{{name}}`` whose name is a key of ``variables``.

    Replacement values are inserted as-is and never rescanned. Placeholders naming
    an undefined variable are left verbatim and listed in ``unresolved``.
    """
    unresolved: list[str] = []

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        value = variables.get(name)
        if value is None:
            if name not in unresolved:
                unresolved.append(name)
            return match.group(0)
        return value

    substituted = PLACEHOLDER_PATTERN.sub(_replace, text)
    return SubstitutionResult(text=substituted, unresolved=tuple(unresolved))


class SectionRenderer:
    """Render prompt sections and few-shot examples with fixed Jinja2 layouts."""

    def __init__(
        self,
        section_template: str = SECTION_TEMPLATE,
        example_template: str = EXAMPLE_TEMPLATE,
    ) -> None:
        """Configure a strict Jinja2 environment without autoescaping."""
        self._env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=False,
        )
        self._section: Template = self._env.from_string(section_template)
        self._example: Template = self._env.from_string(example_template)

    def render_section(self, title: str, body: str) -> str:
        """Return a header line followed by ``body``."""
        return self._section.render(title=title, body=body)

    def render_example(self, index: int, example_input: str, example_output: str) -> str:
        """Return one numbered example block."""
        return self._example.render(
            index=index,
            example_input=example_input,
            example_output=example_output,
        )


__all__ = [
    "EXAMPLE_TEMPLATE",
    "PLACEHOLDER_PATTERN",
    "SECTION_TEMPLATE",
    "SectionRenderer",
    "SubstitutionResult",
    "substitute_variables",
]
