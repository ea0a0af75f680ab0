"""noxfile.py - Nox sessions for Prompt Builder.

Updates:
  v0.1.0 - 2026-10-16 - Ruff/Pyright/Pytest quality gates run from the project `.venv`.

Install the project with `pip install -e .[dev]` inside `.venv` before running these sessions.
Sessions:
- format: format code with ruff
- lint: run ruff lint checks
- typecheck: run pyright
- test: run pytest with coverage across xdist workers
- all: run the full quality gate suite
"""

from __future__ import annotations

import sys
from pathlib import Path

import nox

CODE_LOCATIONS: tuple[str, ...] = (
    "main.py",
    "catalog",
    "cli",
    "config",
    "core",
    "models",
    "tests",
)
COVERAGE_TARGETS: tuple[str, ...] = ("--cov=core", "--cov=models", "--cov=config", "--cov=cli")


def _venv_executable(command: str) -> Path:
    venv_dir = Path(".venv")
    if sys.platform == "win32":
        return venv_dir / "Scripts" / f"{command}.exe"
    return venv_dir / "bin" / command


def _require_venv_tool(session: nox.Session, command: str) -> str:
    """Return the `.venv` tool path, failing with guidance when missing."""
    candidate = _venv_executable(command)
    if not candidate.exists():
        session.error(
            f"Project virtual environment tool is missing: {candidate}. "
            "Create `.venv` and run `pip install -e .[dev]`."
        )
    return str(candidate)


def _run_pytest(session: nox.Session) -> None:
    pytest = _require_venv_tool(session, "pytest")
    session.run(
        pytest,
        "-n",
        "auto",
        *COVERAGE_TARGETS,
        "--cov-report=term-missing",
        "--cov-fail-under=85",
        "tests",
        *session.posargs,
        external=True,
    )


@nox.session(venv_backend="none")
def format(session: nox.Session) -> None:
    """Format code using ruff.

    Usage: `nox -s format`
    """
    ruff = _require_venv_tool(session, "ruff")
    session.run(ruff, "format", *CODE_LOCATIONS, external=True)


@nox.session(venv_backend="none")
def lint(session: nox.Session) -> None:
    """Usage: `nox -s lint`"""
    ruff = _require_venv_tool(session, "ruff")
    session.run(ruff, "check", *CODE_LOCATIONS, external=True)


@nox.session(venv_backend="none")
def typecheck(session: nox.Session) -> None:
    """Usage: `nox -s typecheck`"""
    session.run(_require_venv_tool(session, "pyright"), external=True)


@nox.session(venv_backend="none")
def test(session: nox.Session) -> None:
    """Run pytest with coverage; extra arguments are forwarded to pytest.

    Usage: `nox -s test -- -k critique`
    """
    _run_pytest(session)


@nox.session(venv_backend="none")
def all(session: nox.Session) -> None:
    """Run format check, lint, type check, and tests in order."""
    ruff = _require_venv_tool(session, "ruff")
    session.run(ruff, "format", "--check", *CODE_LOCATIONS, external=True)
    session.run(ruff, "check", *CODE_LOCATIONS, external=True)
    session.run(_require_venv_tool(session, "pyright"), external=True)
    _run_pytest(session)
