"""Heuristic critique and rewrite synthesis for prompt states.

Rules run in a fixed order. Each may contribute a suggestion and a field-level
patch; patches are merged in rule order (later rules win per field) and the
rewrite is always the assembler's output for the patched state.

Updates:
  v0.2.1 - 2026-10-19 - Measure goal length after variable substitution.
  v0.2.0 - 2026-10-13 - Make goal length and generic output formats configurable.
  v0.1.1 - 2026-10-12 - Omit rewrite and patch when no rule proposes a change.
  v0.1.0 - 2026-10-10 - Introduce rule-based critique engine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final

from models.prompt_state import RECORD_KEYS, PromptExample, PromptState, merge_state

from .assembler import AssembledPrompt, assemble, render_prompt
from .checklist import has_examples
from .templating import substitute_variables

logger = logging.getLogger(__name__)

DEFAULT_MIN_GOAL_LENGTH: Final[int] = 20
DEFAULT_GENERIC_OUTPUT_FORMATS: Final[frozenset[str]] = frozenset(
    {
        "answer",
        "bullets",
        "essay",
        "json",
        "list",
        "markdown",
        "paragraph",
        "prose",
        "report",
        "response",
        "summary",
        "table",
        "text",
    }
)
GOAL_PLACEHOLDER: Final[str] = "[Describe the task and the outcome you expect]"
PLACEHOLDER_EXAMPLE: Final[PromptExample] = PromptExample(
    input="[Representative input]",
    output="[Ideal output for that input]",
)
DEFAULT_GUARDRAILS: Final[str] = (
    "Do not fabricate facts, sources, or data; say so when information is missing. "
    "Stay within the scope of the stated goal and decline unrelated or harmful requests."
)
DEFAULT_RUBRIC: Final[str] = (
    "The answer is useful, correct, complete, concise, and follows the output format."
)


@dataclass(frozen=True, slots=True)
class Critique:
    """Suggestions for a prompt state plus an optional synthesized rewrite.

    ``rewrite`` and ``state_patch`` are either both set or both ``None``.
    """

    suggestions: tuple[str, ...]
    rewrite: str | None = None
    state_patch: Mapping[str, Any] | None = None

    def apply(self, state: PromptState) -> PromptState:
        """Return ``state`` with the proposed patch merged in."""
        return merge_state(state, self.state_patch)

    def to_record(self) -> dict[str, Any]:
        """Return a JSON-ready mapping using the shared camelCase state keys."""
        patch_record: dict[str, Any] | None = None
        if self.state_patch is not None:
            patch_record = {}
            for name, value in self.state_patch.items():
                if name == "examples":
                    value = [PromptExample.from_record(item).to_record() for item in value]
                elif name == "variables":
                    value = dict(value)
                patch_record[RECORD_KEYS.get(name, name)] = value
        return {
            "suggestions": list(self.suggestions),
            "rewrite": self.rewrite,
            "statePatch": patch_record,
        }


@dataclass(frozen=True, slots=True)
class RuleFinding:
    """Message and optional patch fragment produced by one fired rule."""

    message: str
    patch: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


CritiqueRule = Callable[["CritiqueEngine", PromptState, AssembledPrompt], RuleFinding | None]


def _normalise_words(words: Iterable[str]) -> frozenset[str]:
    return frozenset(word.strip().lower() for word in words if word and word.strip())


def _goal_rule(
    engine: CritiqueEngine, state: PromptState, _: AssembledPrompt
) -> RuleFinding | None:
    goal = state.goal.strip()
    rendered_goal = substitute_variables(goal, state.variables).text.strip()
    if len(rendered_goal) >= engine.min_goal_length:
        return None
    if not goal:
        message = "Add a goal that states the task and the outcome you expect."
        patched = GOAL_PLACEHOLDER
    else:
        message = (
            "Clarify the goal: it is very short. Describe the task, its scope, "
            "and what a successful result looks like."
        )
        patched = f"{GOAL_PLACEHOLDER} {goal}"
    return RuleFinding(message, {"goal": patched})


def _output_format_rule(
    engine: CritiqueEngine, state: PromptState, _: AssembledPrompt
) -> RuleFinding | None:
    output_format = state.output_format.strip()
    words = output_format.split()
    if output_format and not (
        len(words) == 1 and words[0].strip(".:;,!").lower() in engine.generic_output_formats
    ):
        return None
    if not output_format:
        message = (
            "Specify the output format, e.g. bullet points, numbered steps, "
            "a table, or a JSON schema."
        )
        patched = (
            "Return a short summary followed by bullet points with the key details. "
            "Use clearly labelled sections."
        )
    else:
        message = (
            f"The output format '{output_format}' is vague. Describe the expected "
            "structure, e.g. required sections, bullet points, or an exact schema."
        )
        patched = (
            f"Respond in {output_format} with clearly labelled sections. "
            "State the exact fields or structure the answer must contain."
        )
    return RuleFinding(message, {"output_format": patched})


def _examples_rule(
    _: CritiqueEngine, state: PromptState, __: AssembledPrompt
) -> RuleFinding | None:
    if has_examples(state):
        return None
    return RuleFinding(
        "Add at least one few-shot example showing an input and the ideal output.",
        {"examples": (*state.examples, PLACEHOLDER_EXAMPLE)},
    )


def _guardrails_rule(
    _: CritiqueEngine, state: PromptState, __: AssembledPrompt
) -> RuleFinding | None:
    if state.constraints.strip() or state.guardrails.strip():
        return None
    return RuleFinding(
        "Add explicit guardrails against fabricated information and out-of-scope answers.",
        {"guardrails": DEFAULT_GUARDRAILS},
    )


def _variables_rule(
    _: CritiqueEngine, __: PromptState, rendered: AssembledPrompt
) -> RuleFinding | None:
    missing = rendered.unresolved_variables
    if not missing:
        return None
    names = ", ".join(f"{{{{{name}}}}}" for name in missing)
    noun = "variable" if len(missing) == 1 else "variables"
    return RuleFinding(f"Define the missing {noun}: {names}.")


def _rubric_rule(
    _: CritiqueEngine, state: PromptState, __: AssembledPrompt
) -> RuleFinding | None:
    if state.rubric.strip():
        return None
    return RuleFinding(
        "Define success criteria (a rubric) the final answer will be judged against.",
        {"rubric": DEFAULT_RUBRIC},
    )


CRITIQUE_RULES: Final[tuple[tuple[str, CritiqueRule], ...]] = (
    ("goal", _goal_rule),
    ("output_format", _output_format_rule),
    ("examples", _examples_rule),
    ("guardrails", _guardrails_rule),
    ("variables", _variables_rule),
    ("rubric", _rubric_rule),
)


@dataclass(frozen=True, slots=True)
class CritiqueEngine:
    """Run heuristic quality rules over a prompt state."""

    min_goal_length: int = DEFAULT_MIN_GOAL_LENGTH
    generic_output_formats: frozenset[str] = DEFAULT_GENERIC_OUTPUT_FORMATS

    def __post_init__(self) -> None:
        if self.min_goal_length < 0:
            raise ValueError("min_goal_length must not be negative")
        object.__setattr__(
            self,
            "generic_output_formats",
            _normalise_words(self.generic_output_formats),
        )

    def critique(self, state: PromptState) -> Critique | None:
        """Return suggestions for ``state`` or ``None`` when no rule fires."""
        rendered = render_prompt(state)
        suggestions: list[str] = []
        patch: dict[str, Any] = {}
        fired: list[str] = []
        for key, rule in CRITIQUE_RULES:
            finding = rule(self, state, rendered)
            if finding is None:
                continue
            fired.append(key)
            suggestions.append(finding.message)
            patch.update(finding.patch)

        if not suggestions:
            logger.debug("Critique found no issues", extra={"length": len(rendered.text)})
            return None

        logger.debug(
            "Critique completed",
            extra={"fired_rules": fired, "patched_fields": sorted(patch)},
        )
        if not patch:
            return Critique(suggestions=tuple(suggestions))
        state_patch = MappingProxyType(patch)
        return Critique(
            suggestions=tuple(suggestions),
            rewrite=assemble(merge_state(state, state_patch)),
            state_patch=state_patch,
        )


_DEFAULT_ENGINE = CritiqueEngine()


def critique(state: PromptState) -> Critique | None:
    """Critique ``state`` using the default rule thresholds."""
    return _DEFAULT_ENGINE.critique(state)


__all__ = [
    "CRITIQUE_RULES",
    "Critique",
    "CritiqueEngine",
    "DEFAULT_GENERIC_OUTPUT_FORMATS",
    "DEFAULT_GUARDRAILS",
    "DEFAULT_MIN_GOAL_LENGTH",
    "DEFAULT_RUBRIC",
    "GOAL_PLACEHOLDER",
    "PLACEHOLDER_EXAMPLE",
    "RuleFinding",
    "critique",
]
