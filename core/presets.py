"""Preset library loading, lookup, and export for Prompt Builder.

The library is an ordered, caller-owned collection of named prompt states. The
assembler, checklist, and critique engine never read presets; callers pass a
preset's ``state`` to them like any other state.

Updates:
  v0.2.0 - 2026-10-14 - Add YAML import/export alongside JSON.
  v0.1.1 - 2026-10-12 - Name saved presets "Custom <n>" like the web builder.
  v0.1.0 - 2026-10-10 - Load packaged presets and user preset files.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, cast

import yaml

from catalog import builtin_presets_resource
from models.preset import Preset, new_preset_id
from models.prompt_state import PromptState, PromptStateTypeError

from .exceptions import PresetNotFoundError, PresetStorageError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def _now_iso() -> str:
    """Return the current UTC timestamp in ISO-8601 format."""
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True, slots=True)
class PresetLibrary:
    """Ordered collection of presets; editing returns a new library."""

    presets: tuple[Preset, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Preset]:
        return iter(self.presets)

    def __len__(self) -> int:
        return len(self.presets)

    def get(self, preset_id: str) -> Preset:
        """Return the preset with ``preset_id``."""
        for preset in self.presets:
            if preset.id == preset_id:
                return preset
        raise PresetNotFoundError(f"Preset not found: {preset_id}")

    def save_state(self, state: PromptState, name: str | None = None) -> PresetLibrary:
        """Return a library with ``state`` prepended as a new preset."""
        label = (name or "").strip() or f"Custom {len(self.presets) + 1}"
        preset = Preset(id=new_preset_id(), name=label, state=state)
        logger.debug("Saved preset", extra={"preset_id": preset.id, "preset_name": label})
        return PresetLibrary((preset, *self.presets))

    def remove(self, preset_id: str) -> PresetLibrary:
        """Return a library without the preset identified by ``preset_id``."""
        self.get(preset_id)
        return PresetLibrary(tuple(preset for preset in self.presets if preset.id != preset_id))

    def extend(self, presets: Iterable[Preset]) -> PresetLibrary:
        """Return a library with ``presets`` appended, replacing entries sharing an id."""
        incoming = list(presets)
        incoming_ids = {preset.id for preset in incoming}
        kept = [preset for preset in self.presets if preset.id not in incoming_ids]
        return PresetLibrary((*kept, *incoming))


def _entries_from_payload(payload: object, source: str) -> list[Mapping[str, Any]]:
    if isinstance(payload, Mapping):
        payload_mapping = cast("Mapping[str, Any]", payload)
        if "presets" in payload_mapping:
            payload = payload_mapping["presets"]
        else:
            return [payload_mapping]
    if not isinstance(payload, list):
        raise PresetStorageError(f"Preset file {source} must contain an object or a list")
    entries: list[Mapping[str, Any]] = []
    for raw_entry in cast("list[object]", payload):
        if not isinstance(raw_entry, Mapping):
            raise PresetStorageError(f"Preset entries in {source} must be objects")
        entries.append(cast("Mapping[str, Any]", raw_entry))
    return entries


def _parse_presets(contents: str, *, source: str, as_yaml: bool) -> PresetLibrary:
    try:
        payload: object = yaml.safe_load(contents) if as_yaml else json.loads(contents)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise PresetStorageError(f"Invalid preset file {source}: {exc}") from exc
    if payload is None:
        return PresetLibrary()
    try:
        presets = tuple(Preset.from_record(entry) for entry in _entries_from_payload(payload, source))
    except PromptStateTypeError as exc:
        raise PresetStorageError(f"Invalid preset in {source}: {exc}") from exc
    return PresetLibrary(presets)


def builtin_presets() -> PresetLibrary:
    """Return the preset library packaged with the application."""
    resource = builtin_presets_resource()
    library = _parse_presets(
        resource.read_text(encoding="utf-8"),
        source="built-in presets",
        as_yaml=False,
    )
    logger.debug("Loaded built-in presets", extra={"count": len(library)})
    return library


def load_preset_library(path: Path) -> PresetLibrary:
    """Read a preset library from a JSON or YAML file."""
    resolved = path.expanduser()
    try:
        contents = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise PresetStorageError(f"Cannot read preset library: {resolved}") from exc
    library = _parse_presets(
        contents,
        source=str(resolved),
        as_yaml=resolved.suffix.lower() in _YAML_SUFFIXES,
    )
    logger.info("Loaded %d preset(s) from %s", len(library), resolved)
    return library


def export_preset_library(
    library: PresetLibrary,
    output_path: Path,
    *,
    fmt: str | None = None,
) -> Path:
    """Write ``library`` to JSON or YAML and return the resolved path."""
    resolved_path = output_path.expanduser()
    fmt_lower = (fmt or ("yaml" if resolved_path.suffix.lower() in _YAML_SUFFIXES else "json"))
    fmt_lower = fmt_lower.lower()
    if fmt_lower not in {"json", "yaml"}:
        raise ValueError("fmt must be 'json' or 'yaml'")

    payload = {
        "generated_at": _now_iso(),
        "count": len(library),
        "presets": [preset.to_record() for preset in library],
    }
    try:
        resolved_path.parent.mkdir(parents=True, exist_ok=True)
        if fmt_lower == "json":
            resolved_path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        else:
            with resolved_path.open("w", encoding="utf-8") as handle:
                yaml.safe_dump(payload, handle, allow_unicode=True, sort_keys=False)
    except OSError as exc:
        raise PresetStorageError(f"Cannot write preset library: {resolved_path}") from exc
    logger.info("Exported %d preset(s) to %s", len(library), resolved_path)
    return resolved_path


__all__ = [
    "PresetLibrary",
    "builtin_presets",
    "export_preset_library",
    "load_preset_library",
]
