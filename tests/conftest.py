"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-10-15 - Isolate settings sources from the developer environment.
  v0.1.0 - 2026-10-08 - Provide complete and minimal prompt state fixtures.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from models.prompt_state import PromptExample, PromptState


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run every test from an empty directory without PROMPT_BUILDER_* variables."""
    for name in list(os.environ):
        if name.upper().startswith("PROMPT_BUILDER_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def complete_state() -> PromptState:
    """Return a state that satisfies every checklist and critique rule."""
    return PromptState(
        goal="Summarize the quarterly report for {{team}} in five bullet points.",
        role="You are a financial analyst.",
        audience="Engineering managers",
        context="The report covers Q3 revenue and hiring.",
        inputs="{{report}}",
        constraints="Use only figures from the report.",
        output_format="Five bullet points followed by a one-line takeaway.",
        style="Plain and concise.",
        steps="1) Read 2) Extract figures 3) Summarize",
        examples=(
            PromptExample(input="Revenue rose 5%", output="- Revenue: +5%"),
            PromptExample(input="Hiring paused", output="- Hiring: paused"),
        ),
        guardrails="Do not invent numbers.",
        rubric="Accurate, complete, and under 120 words.",
        variables={"team": "the platform team", "report": "Q3 revenue was $2M."},
    )
