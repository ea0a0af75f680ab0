"""Common exception classes for core package.

This module centralises shared exception definitions for the **core** package.
All exceptions ultimately inherit from :class:`PromptBuilderError`, allowing
callers to catch a single base class for any builder-related failure while
still distinguishing individual error categories when needed.

The assembler, checklist, and critique engine never raise: they are total over
every well-formed :class:`models.PromptState`. Boundary type mismatches are
reported by :class:`models.PromptStateTypeError`, defined beside the model.

Updates:
  v0.2.0 - 2026-10-10 - Add preset library exception hierarchy.
  v0.1.0 - 2026-10-07 - Created module with share and decode errors.
"""

from __future__ import annotations


class PromptBuilderError(Exception):
    """Base exception for Prompt Builder failures."""


class PromptShareError(PromptBuilderError):
    """Base class for shareable-link workflow failures."""


class PromptStateDecodeError(PromptShareError):
    """Raised when a shared state token cannot be decoded into a prompt state."""


class PresetError(PromptBuilderError):
    """Base class for preset library failures."""


class PresetNotFoundError(PresetError):
    """Raised when a preset identifier is not present in the library."""


class PresetStorageError(PresetError):
    """Raised when reading or writing a preset library file fails."""


__all__ = [
    "PresetError",
    "PresetNotFoundError",
    "PresetStorageError",
    "PromptBuilderError",
    "PromptShareError",
    "PromptStateDecodeError",
]
