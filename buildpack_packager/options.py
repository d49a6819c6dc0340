from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import InvalidOptions
from .naming import MODE_CACHED, MODE_UNCACHED, MODES

MANIFEST_FILE = "manifest.yml"

_PATH_KEYS = ("root_dir", "cache_dir", "deprecated_manifest_path", "manifest_path")
_BOOL_KEYS = ("force_download", "include_deprecated_manifest", "check_dependency_uris")


def default_cache_dir() -> Path:
    home = os.environ.get("HOME") or str(Path.home())
    return Path(home) / ".buildpack-packager" / "cache"


def _abs(p: Optional[Path | str]) -> Optional[Path]:
    if p is None:
        return None
    return Path(p).expanduser().absolute()


@dataclass(frozen=True)
class PackagingOptions:
    """Everything one packaging run needs, validated when constructed."""

    root_dir: Path
    mode: str = MODE_UNCACHED
    cache_dir: Optional[Path] = None
    force_download: bool = False
    include_deprecated_manifest: bool = False
    deprecated_manifest_path: Optional[Path] = None
    manifest_path: Optional[Path] = None
    check_dependency_uris: bool = False
    command_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise InvalidOptions(f"mode must be one of {', '.join(MODES)}, got {self.mode!r}")

        root = Path(self.root_dir).expanduser().absolute()
        if not root.is_dir():
            raise InvalidOptions(f"root_dir is not a directory: {root}")
        object.__setattr__(self, "root_dir", root)

        if self.mode == MODE_CACHED and self.cache_dir is None:
            raise InvalidOptions("cache_dir is required in cached mode")
        object.__setattr__(self, "cache_dir", _abs(self.cache_dir))

        if self.include_deprecated_manifest and self.deprecated_manifest_path is None:
            raise InvalidOptions("deprecated_manifest_path is required with include_deprecated_manifest")
        object.__setattr__(self, "deprecated_manifest_path", _abs(self.deprecated_manifest_path))
        object.__setattr__(self, "manifest_path", _abs(self.manifest_path) or root / MANIFEST_FILE)

        if self.command_timeout is not None and self.command_timeout <= 0:
            raise InvalidOptions(f"command_timeout must be positive, got {self.command_timeout}")

    @property
    def cached(self) -> bool:
        return self.mode == MODE_CACHED

    @property
    def manifest_file(self) -> Path:
        return self.manifest_path or self.root_dir / MANIFEST_FILE


def load_options_file(path: str) -> Dict[str, Any]:
    """Read a YAML packaging config; keys mirror PackagingOptions field names."""
    p = Path(path)
    if not p.exists():
        raise InvalidOptions(f"packaging config not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise InvalidOptions("packaging config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read packaging config files") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise InvalidOptions(f"{p.name} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise InvalidOptions(f"{p.name} must contain a mapping/object")
    return raw


def options_from_mapping(raw: Dict[str, Any], *, base_dir: Path) -> PackagingOptions:
    """Build options from a config mapping; relative paths resolve against base_dir."""
    known = set(PackagingOptions.__dataclass_fields__)
    unknown = sorted(set(raw) - known)
    if unknown:
        raise InvalidOptions(f"Unknown packaging option(s): {', '.join(unknown)}")

    kwargs: Dict[str, Any] = dict(raw)
    for key in _PATH_KEYS:
        if kwargs.get(key) is not None:
            kwargs[key] = base_dir / Path(str(kwargs[key])).expanduser()
    for key in _BOOL_KEYS:
        if key in kwargs and not isinstance(kwargs[key], bool):
            raise InvalidOptions(f"{key} must be true or false, got {kwargs[key]!r}")
    if kwargs.get("command_timeout") is not None:
        kwargs["command_timeout"] = float(kwargs["command_timeout"])
    kwargs.setdefault("root_dir", base_dir)
    return PackagingOptions(**kwargs)
