"""Presence and shape checks run over a prompt state.

Updates:
  v0.1.1 - 2026-10-12 - Append rubric check after the mandatory battery.
  v0.1.0 - 2026-10-09 - Introduce fixed-order quality checklist.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from models.prompt_state import PromptState

from .assembler import AssembledPrompt, render_prompt


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Pass/fail outcome of a single checklist rule."""

    key: str
    label: str
    passed: bool


CheckPredicate = Callable[[PromptState, AssembledPrompt], bool]


@dataclass(frozen=True, slots=True)
class ChecklistRule:
    """Named predicate contributing one row to the checklist."""

    key: str
    label: str
    predicate: CheckPredicate

    def evaluate(self, state: PromptState, rendered: AssembledPrompt) -> CheckResult:
        return CheckResult(key=self.key, label=self.label, passed=self.predicate(state, rendered))


def _has_text(value: str) -> bool:
    return bool(value.strip())


def has_examples(state: PromptState) -> bool:
    """Return True when at least one example carries content."""
    return any(not example.is_blank for example in state.examples)


CHECKLIST_RULES: Final[tuple[ChecklistRule, ...]] = (
    ChecklistRule("goal", "Goal is clearly stated", lambda s, _: _has_text(s.goal)),
    ChecklistRule(
        "output_format",
        "Output format is specified",
        lambda s, _: _has_text(s.output_format),
    ),
    ChecklistRule(
        "constraints",
        "Constraints or guardrails are defined",
        lambda s, _: _has_text(s.constraints) or _has_text(s.guardrails),
    ),
    ChecklistRule("examples", "At least one example is provided", lambda s, _: has_examples(s)),
    ChecklistRule(
        "variables",
        "All {{variables}} are defined",
        lambda _, rendered: not rendered.unresolved_variables,
    ),
    ChecklistRule("role", "Role is assigned", lambda s, _: _has_text(s.role)),
    ChecklistRule("rubric", "Success criteria are defined", lambda s, _: _has_text(s.rubric)),
)


def checklist(state: PromptState) -> tuple[CheckResult, ...]:
    """Evaluate every checklist rule against ``state`` in fixed order."""
    rendered = render_prompt(state)
    return tuple(rule.evaluate(state, rendered) for rule in CHECKLIST_RULES)


__all__ = ["CHECKLIST_RULES", "CheckResult", "ChecklistRule", "checklist", "has_examples"]
