"""Settings management utilities for Prompt Builder configuration.

Updates:
  v0.2.0 - 2026-10-15 - Load .env values through python-dotenv without touching os.environ.
  v0.1.1 - 2026-10-14 - Accept comma-separated generic output format overrides.
  v0.1.0 - 2026-10-12 - Introduce critique thresholds, preset path, and share URL settings.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, cast
from urllib.parse import urlsplit

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from core.critique import DEFAULT_GENERIC_OUTPUT_FORMATS, DEFAULT_MIN_GOAL_LENGTH
from core.sharing import DEFAULT_SHARE_BASE_URL

_DOTENV_FALLBACK_PATH = ".env"
_ENV_PREFIX = "PROMPT_BUILDER_"
_CONFIG_KEYS: tuple[str, ...] = (
    "min_goal_length",
    "generic_output_formats",
    "presets_path",
    "share_base_url",
)

logger = logging.getLogger("prompt_builder.settings")


class SettingsError(Exception):
    """Raised when Prompt Builder configuration cannot be loaded or validated."""


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv(f"{_ENV_PREFIX}ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class PromptBuilderSettings(BaseSettings):
    """Application configuration sourced from keyword overrides, JSON, and the environment."""

    min_goal_length: int = Field(
        default=DEFAULT_MIN_GOAL_LENGTH,
        description="Goals shorter than this many characters are flagged by the critique.",
    )
    generic_output_formats: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_GENERIC_OUTPUT_FORMATS),
        description="Single-word output formats the critique treats as too vague.",
    )
    presets_path: Path | None = Field(
        default=None,
        description="Optional JSON or YAML preset library merged after the built-in presets.",
    )
    share_base_url: str = Field(
        default=DEFAULT_SHARE_BASE_URL,
        description="Base URL used when building shareable links.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": _ENV_PREFIX,
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("min_goal_length")
    def _validate_min_goal_length(cls, value: int) -> int:
        """Ensure the goal length threshold is positive."""
        if value <= 0:
            raise ValueError("min_goal_length must be greater than zero")
        return value

    @field_validator("generic_output_formats", mode="before")
    def _normalise_generic_formats(cls, value: object) -> list[str]:
        """Accept a list, a JSON array, or a comma-separated string of words."""
        if value in (None, "", [], ()):  # type: ignore[comparison-overlap]
            return sorted(DEFAULT_GENERIC_OUTPUT_FORMATS)
        if isinstance(value, str):
            stripped = value.strip()
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError:
                items = [item.strip().lower() for item in stripped.split(",") if item.strip()]
            else:
                if isinstance(parsed, Sequence) and not isinstance(parsed, (str, bytes)):
                    sequence = cast("Sequence[object]", parsed)
                    items = [str(item).strip().lower() for item in sequence if str(item).strip()]
                else:
                    items = [str(parsed).strip().lower()]
            return items
        if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
            sequence_value = cast("Sequence[object]", value)
            return [str(item).strip().lower() for item in sequence_value if str(item).strip()]
        raise ValueError(
            "generic_output_formats must be a list, comma-separated string, or JSON array"
        )

    @field_validator("presets_path", mode="before")
    def _normalise_presets_path(cls, value: Any) -> Path | None:
        """Coerce the optional preset library path into an absolute Path."""
        if value in (None, ""):
            return None
        return Path(str(value)).expanduser().resolve()

    @field_validator("share_base_url", mode="before")
    def _validate_share_base_url(cls, value: object) -> str:
        """Require an http(s) URL with a hostname."""
        if value in (None, ""):
            return DEFAULT_SHARE_BASE_URL
        text = str(value).strip()
        parts = urlsplit(text)
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise ValueError("share_base_url must be an http(s) URL with a hostname")
        return text

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(min_goal_length=30)).
            2. JSON configuration file.
            3. Environment variables, then ``.env`` entries.
        """

        def env_with_dotenv(_: BaseSettings | None = None) -> dict[str, Any]:
            dotenv = _read_dotenv_values()
            data: dict[str, Any] = {}
            for key in _CONFIG_KEYS:
                env_key = f"{_ENV_PREFIX}{key.upper()}"
                value = os.getenv(env_key)
                if value is None:
                    value = dotenv.get(env_key)
                if value is None or not value.strip():
                    continue
                data[key] = value.strip()
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_dotenv),
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv(f"{_ENV_PREFIX}CONFIG_JSON")
            if explicit_path:
                path = Path(explicit_path).expanduser()
                if not path.exists():
                    raise SettingsError(f"Configuration file not found: {path}")
            else:
                path = Path("config") / "config.json"
                if not path.exists():
                    return {}
            try:
                raw_contents = path.read_text(encoding="utf-8")
            except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                raise SettingsError(f"Unable to read configuration file: {path}") from exc
            try:
                data = json.loads(raw_contents)
            except json.JSONDecodeError as exc:
                raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
            if not isinstance(data, dict):
                raise SettingsError(f"Configuration file {path} must contain a JSON object")
            mapping_data = cast("Mapping[object, Any]", data)
            unknown = sorted(str(key) for key in mapping_data if str(key) not in _CONFIG_KEYS)
            if unknown:
                logger.warning(
                    "Ignoring unknown key(s) %s in configuration file %s",
                    ", ".join(unknown),
                    path,
                )
            return {str(key): value for key, value in mapping_data.items() if key in _CONFIG_KEYS}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> PromptBuilderSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return PromptBuilderSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid Prompt Builder configuration") from exc


__all__ = ["PromptBuilderSettings", "SettingsError", "load_settings"]
