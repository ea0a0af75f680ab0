"""Lightweight integration checks for main module.

Updates:
  v0.2.0 - 2026-10-15 - Cover preset export, strict checklist, and share round-trips.
  v0.1.0 - 2026-10-13 - Cover command dispatch and exit statuses.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import yaml

import main
from core.assembler import assemble
from core.critique import GOAL_PLACEHOLDER
from core.sharing import DEFAULT_SHARE_BASE_URL, state_from_share_url
from models.prompt_state import PromptState, default_prompt_state


def _write_state(path: Path, state: PromptState) -> Path:
    if path.suffix in {".yaml", ".yml"}:
        path.write_text(yaml.safe_dump(state.to_record()), encoding="utf-8")
    else:
        path.write_text(json.dumps(state.to_record()), encoding="utf-8")
    return path


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    """Running without a subcommand shows usage and succeeds."""
    assert main.main([]) == 0
    assert "usage: prompt-builder" in capsys.readouterr().out


def test_print_settings_summary(capsys: pytest.CaptureFixture[str]) -> None:
    """--print-settings renders the resolved configuration."""
    assert main.main(["--print-settings"]) == 0
    out = capsys.readouterr().out
    assert "Minimum goal length: 20" in out
    assert "Preset library: not set" in out
    assert f"Share base URL: {DEFAULT_SHARE_BASE_URL}" in out


def test_invalid_settings_exit_with_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Configuration errors stop the CLI with status 2."""
    monkeypatch.setenv("PROMPT_BUILDER_MIN_GOAL_LENGTH", "0")
    assert main.main(["assemble", "--defaults"]) == 2


def test_assemble_defaults(capsys: pytest.CaptureFixture[str]) -> None:
    """The starter state assembles into its pre-filled sections."""
    assert main.main(["assemble", "--defaults"]) == 0
    out = capsys.readouterr().out
    assert out == assemble(default_prompt_state()) + "\n"
    assert out.startswith("### Role\nYou are a senior expert")


@pytest.mark.parametrize("filename", ["state.json", "state.yaml"])
def test_assemble_from_state_file(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    complete_state: PromptState,
    filename: str,
) -> None:
    """JSON and YAML state files are both accepted."""
    path = _write_state(tmp_path / filename, complete_state)
    assert main.main(["assemble", "--state", str(path)]) == 0
    assert capsys.readouterr().out.strip() == assemble(complete_state)


def test_invalid_state_file_is_an_input_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Unreadable or malformed state files exit with status 4."""
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"goal": ["not", "text"]}), encoding="utf-8")

    assert main.main(["assemble", "--state", str(bad)]) == 4
    assert main.main(["assemble", "--state", str(tmp_path / "absent.json")]) == 4
    assert "Invalid prompt state" in capsys.readouterr().out


def test_missing_state_source_is_an_input_error(capsys: pytest.CaptureFixture[str]) -> None:
    """Commands that need a state refuse to run without one."""
    assert main.main(["assemble"]) == 4
    assert "--defaults" in capsys.readouterr().out


def test_state_sources_are_mutually_exclusive() -> None:
    """Only one state source flag may be given."""
    with pytest.raises(SystemExit):
        main.main(["assemble", "--defaults", "--preset", "code-review"])


def test_checklist_strict_fails_for_incomplete_state(capsys: pytest.CaptureFixture[str]) -> None:
    """--strict turns checklist failures into exit status 1."""
    assert main.main(["checklist", "--defaults"]) == 0
    assert main.main(["checklist", "--defaults", "--strict"]) == 1
    out = capsys.readouterr().out
    assert "[ ] Goal is clearly stated" in out
    assert "[x] Role is assigned" in out


def test_checklist_json_for_complete_state(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    complete_state: PromptState,
) -> None:
    """A complete state passes every item in the JSON checklist."""
    path = _write_state(tmp_path / "state.json", complete_state)
    assert main.main(["checklist", "--state", str(path), "--json", "--strict"]) == 0

    items = json.loads(capsys.readouterr().out)
    assert [item["key"] for item in items][:5] == [
        "goal",
        "output_format",
        "constraints",
        "examples",
        "variables",
    ]
    assert all(item["pass"] for item in items)


def test_critique_json_and_text(capsys: pytest.CaptureFixture[str]) -> None:
    """Critique prints suggestions and a rewrite in text and JSON form."""
    assert main.main(["critique", "--defaults", "--json"]) == 0
    record = json.loads(capsys.readouterr().out)
    assert record["suggestions"]
    assert record["rewrite"].startswith("### Role")
    assert record["statePatch"]["goal"] == GOAL_PLACEHOLDER

    assert main.main(["critique", "--defaults"]) == 0
    out = capsys.readouterr().out
    assert "Suggestions" in out
    assert "Suggested rewrite" in out


def test_critique_apply_emits_improved_state(capsys: pytest.CaptureFixture[str]) -> None:
    """--apply prints the patched state as a JSON record."""
    assert main.main(["critique", "--defaults", "--apply"]) == 0
    improved = PromptState.from_record(json.loads(capsys.readouterr().out))
    assert improved.goal == GOAL_PLACEHOLDER
    assert improved.examples


def test_critique_of_complete_state(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    complete_state: PromptState,
) -> None:
    """A complete state yields no suggestions and a JSON null."""
    path = _write_state(tmp_path / "state.json", complete_state)
    assert main.main(["critique", "--state", str(path)]) == 0
    assert "No suggestions" in capsys.readouterr().out

    assert main.main(["critique", "--state", str(path), "--json"]) == 0
    assert json.loads(capsys.readouterr().out) is None


def test_critique_uses_configured_goal_length(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    complete_state: PromptState,
) -> None:
    """min_goal_length from settings reaches the critique engine."""
    monkeypatch.setenv("PROMPT_BUILDER_MIN_GOAL_LENGTH", "500")
    path = _write_state(tmp_path / "state.json", complete_state)

    assert main.main(["critique", "--state", str(path), "--json"]) == 0
    record = json.loads(capsys.readouterr().out)
    assert "Clarify the goal" in record["suggestions"][0]


def test_share_roundtrip_through_cli(capsys: pytest.CaptureFixture[str]) -> None:
    """A token printed by share loads back through --share."""
    assert main.main(["share", "--defaults", "--token-only"]) == 0
    token = capsys.readouterr().out.strip()

    assert main.main(["assemble", "--share", token]) == 0
    assert capsys.readouterr().out.strip() == assemble(default_prompt_state())


def test_share_url_uses_configured_and_explicit_base(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Share links use the settings base URL unless --base-url is given."""
    assert main.main(["share", "--defaults"]) == 0
    url = capsys.readouterr().out.strip()
    assert url.startswith(f"{DEFAULT_SHARE_BASE_URL}#")
    assert state_from_share_url(url) == default_prompt_state()

    assert main.main(["share", "--defaults", "--base-url", "https://example.com/b"]) == 0
    assert capsys.readouterr().out.startswith("https://example.com/b#")

    monkeypatch.setenv("PROMPT_BUILDER_SHARE_BASE_URL", "http://localhost:9000/")
    assert main.main(["share", "--defaults"]) == 0
    assert capsys.readouterr().out.startswith("http://localhost:9000/#")


def test_corrupt_share_token_is_an_input_error(capsys: pytest.CaptureFixture[str]) -> None:
    """Undecodable share tokens exit with status 4."""
    assert main.main(["assemble", "--share", "@@@@"]) == 4
    assert "not a valid prompt state" in capsys.readouterr().out


def test_presets_list(capsys: pytest.CaptureFixture[str]) -> None:
    """The presets command lists identifiers and names."""
    assert main.main(["presets"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "code-review\tCode review"
    assert len(lines) == 3


def test_presets_export(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--export writes the library in the requested format."""
    target = tmp_path / "exports" / "library.yaml"
    assert main.main(["presets", "--export", str(target)]) == 0

    assert "Preset library exported to" in capsys.readouterr().out
    payload = yaml.safe_load(target.read_text(encoding="utf-8"))
    assert payload["count"] == 3


def test_preset_source_and_configured_library(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """--preset resolves built-in and configured presets; unknown ids fail."""
    library_path = tmp_path / "mine.json"
    library_path.write_text(
        json.dumps({"presets": [{"id": "mine", "name": "Mine", "state": {"goal": "Plan"}}]}),
        encoding="utf-8",
    )
    monkeypatch.setenv("PROMPT_BUILDER_PRESETS_PATH", str(library_path))

    assert main.main(["assemble", "--preset", "mine"]) == 0
    assert capsys.readouterr().out.strip() == "### Goal\nPlan"

    assert main.main(["assemble", "--preset", "code-review"]) == 0
    assert "### Role" in capsys.readouterr().out

    assert main.main(["assemble", "--preset", "missing"]) == 4
    assert "Preset not found: missing" in capsys.readouterr().out


def test_logging_config_file_is_applied(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """An INI logging configuration passed on the command line is loaded."""
    conf = tmp_path / "logging.conf"
    conf.write_text(
        "[loggers]\nkeys=root\n\n"
        "[handlers]\nkeys=null\n\n"
        "[formatters]\nkeys=plain\n\n"
        "[logger_root]\nlevel=INFO\nhandlers=null\n\n"
        "[handler_null]\nclass=NullHandler\nlevel=INFO\nformatter=plain\nargs=()\n\n"
        "[formatter_plain]\nformat=%(levelname)s %(message)s\n",
        encoding="utf-8",
    )
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        assert main.main(["--logging-config", str(conf), "--print-settings"]) == 0
        assert root.level == logging.INFO
        assert any(isinstance(handler, logging.NullHandler) for handler in root.handlers)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
    assert "configuration summary" in capsys.readouterr().out
