from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

CANONICAL_ENTRY: Final[str] = "src/main.ts"


class ManifestError(Exception):
    """The build manifest could not be read or does not describe an entry point."""


class EntryNotFoundError(ManifestError):
    pass


class MalformedPathError(ManifestError):
    pass


class ManifestEntry(BaseModel):
    """One record of a Vite build manifest (.vite/manifest.json)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    file: str = Field(default="")
    css: list[str] = Field(default_factory=list)
    is_entry: bool = Field(default=False, alias="isEntry")
    src: str | None = Field(default=None)

    @field_validator("css", mode="before")
    @classmethod
    def _null_css_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


@dataclass(frozen=True)
class EntryPaths:
    script_path: str
    style_paths: tuple[str, ...] = ()


_manifest_adapter = TypeAdapter(dict[str, ManifestEntry])


def parse_manifest(data: bytes | str) -> dict[str, ManifestEntry]:
    try:
        raw = json.loads(data)
    except ValueError as exc:
        raise ManifestError(f"Manifest is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise ManifestError("Manifest must be a JSON object keyed by source module")

    try:
        return _manifest_adapter.validate_python(raw)
    except ValidationError as exc:
        raise ManifestError(f"Invalid manifest record: {exc}") from exc


def select_entry(
    manifest: dict[str, ManifestEntry], canonical_key: str = CANONICAL_ENTRY
) -> ManifestEntry:
    """Pick the canonical entry, else the first record flagged isEntry."""

    entry = manifest.get(canonical_key)
    if entry is not None:
        return entry

    for candidate in manifest.values():
        if candidate.is_entry:
            return candidate

    raise EntryNotFoundError("entry not found in manifest")


def normalize_asset_path(raw: str) -> str:
    """Return raw as an absolute URL path with exactly one leading slash."""

    path = raw.strip().lstrip("/")
    if not path:
        raise MalformedPathError(f"empty asset path {raw!r}")
    if ".." in path.split("/"):
        raise MalformedPathError(f"asset path escapes the bundle: {raw!r}")
    return "/" + path


def resolve_entry_paths(
    manifest: dict[str, ManifestEntry], canonical_key: str = CANONICAL_ENTRY
) -> EntryPaths:
    entry = select_entry(manifest, canonical_key)
    if not entry.file.strip():
        raise MalformedPathError("entry file missing in manifest")

    return EntryPaths(
        script_path=normalize_asset_path(entry.file),
        style_paths=tuple(normalize_asset_path(css) for css in entry.css if css.strip()),
    )


def resolve_manifest(data: bytes | str, canonical_key: str = CANONICAL_ENTRY) -> EntryPaths:
    return resolve_entry_paths(parse_manifest(data), canonical_key)


def load_manifest(path: Path, canonical_key: str = CANONICAL_ENTRY) -> EntryPaths:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    return resolve_manifest(data, canonical_key)
