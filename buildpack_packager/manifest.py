from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .errors import ManifestLanguageMismatch, ManifestParseError

logger = logging.getLogger(__name__)

_LIST_KEYS = ("dependencies", "exclude_files", "url_to_dependency_map")
_DEPENDENCY_KEYS = ("name", "version", "uri", "md5")


@dataclass(frozen=True)
class Dependency:
    name: str
    version: str
    uri: str
    md5: str

    @classmethod
    def from_mapping(cls, raw: Any, *, source: str) -> "Dependency":
        if not isinstance(raw, dict):
            raise ManifestParseError(f"{source}: dependency entries must be mappings, got {raw!r}")
        missing = [k for k in _DEPENDENCY_KEYS if raw.get(k) in (None, "")]
        if missing:
            raise ManifestParseError(f"{source}: dependency {raw!r} is missing {', '.join(missing)}")
        return cls(
            name=str(raw["name"]),
            version=str(raw["version"]),
            uri=str(raw["uri"]),
            md5=str(raw["md5"]).lower(),
        )

    def to_mapping(self) -> Dict[str, str]:
        return {"name": self.name, "version": self.version, "uri": self.uri, "md5": self.md5}


@dataclass(frozen=True)
class Manifest:
    language: str
    dependencies: Tuple[Dependency, ...] = ()
    exclude_files: Tuple[str, ...] = ()
    url_to_dependency_map: Tuple[Any, ...] = ()
    version: Optional[str] = None
    source: str = "manifest.yml"
    # Top-level keys the packager does not interpret; kept for write_manifest().
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> Dict[str, Any]:
        data = dict(self.extras)
        data["language"] = self.language
        data["url_to_dependency_map"] = list(self.url_to_dependency_map)
        data["dependencies"] = [d.to_mapping() for d in self.dependencies]
        data["exclude_files"] = list(self.exclude_files)
        return data


def _yaml():
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read buildpack manifests") from e
    return yaml


def parse_manifest(raw: Any, *, source: str, version: Optional[str] = None) -> Manifest:
    """Build a Manifest from an already decoded document.

    Only the shape of the fields the packager consumes is checked; full
    schema validation is left to external tooling.
    """

    if not isinstance(raw, dict):
        raise ManifestParseError(f"{source}: manifest must contain a mapping/object")

    language = raw.get("language")
    if not isinstance(language, str) or not language:
        raise ManifestParseError(f"{source}: 'language' must be a non-empty string")

    lists: Dict[str, list] = {}
    for key in _LIST_KEYS:
        value = raw.get(key)
        if value is None:
            value = []
        if not isinstance(value, list):
            raise ManifestParseError(f"{source}: '{key}' must be a list")
        lists[key] = value

    for pattern in lists["exclude_files"]:
        if not isinstance(pattern, str):
            raise ManifestParseError(f"{source}: exclude_files entries must be strings, got {pattern!r}")

    return Manifest(
        language=language,
        dependencies=tuple(Dependency.from_mapping(d, source=source) for d in lists["dependencies"]),
        exclude_files=tuple(lists["exclude_files"]),
        url_to_dependency_map=tuple(lists["url_to_dependency_map"]),
        version=version,
        source=source,
        extras={k: v for k, v in raw.items() if k != "language" and k not in _LIST_KEYS},
    )


def load_manifest(path: Path, *, version: Optional[str] = None) -> Manifest:
    yaml = _yaml()
    if not path.is_file():
        raise ManifestParseError(f"Manifest not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ManifestParseError(f"{path.name}: invalid YAML: {e}") from e

    manifest = parse_manifest(raw, source=path.name, version=version)
    logger.info(
        "Loaded %s (language=%s, %d dependencies)",
        str(path),
        manifest.language,
        len(manifest.dependencies),
    )
    return manifest


def merge_manifests(primary: Manifest, deprecated: Manifest) -> Manifest:
    """Append the deprecated manifest's entries to the primary one. No deduplication."""
    if primary.language != deprecated.language:
        raise ManifestLanguageMismatch(
            primary=primary.source,
            deprecated=deprecated.source,
            primary_language=primary.language,
            deprecated_language=deprecated.language,
        )

    return replace(
        primary,
        dependencies=primary.dependencies + deprecated.dependencies,
        exclude_files=primary.exclude_files + deprecated.exclude_files,
        url_to_dependency_map=primary.url_to_dependency_map + deprecated.url_to_dependency_map,
    )


def write_manifest(manifest: Manifest, path: Path) -> None:
    yaml = _yaml()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(manifest.to_mapping(), sort_keys=False), encoding="utf-8")
