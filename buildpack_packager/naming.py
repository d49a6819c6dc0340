from __future__ import annotations

from pathlib import Path
from typing import List

from .errors import BuildpackVersionError
from .manifest import Manifest

MODE_UNCACHED = "uncached"
MODE_CACHED = "cached"
MODES = (MODE_UNCACHED, MODE_CACHED)

VERSION_FILE = "VERSION"


def read_buildpack_version(root_dir: Path) -> str:
    p = root_dir / VERSION_FILE
    if not p.is_file():
        raise BuildpackVersionError(f"{VERSION_FILE} file missing under {root_dir}")
    version = p.read_text(encoding="utf-8").strip()
    if not version:
        raise BuildpackVersionError(f"{p} is empty")
    return version


def archive_name(manifest: Manifest, mode: str, version: str) -> str:
    suffix = "-cached" if mode == MODE_CACHED else ""
    return f"{manifest.language}_buildpack{suffix}-v{version}.zip"


def artifact_names(manifest: Manifest, version: str) -> List[str]:
    """Archive names this buildpack version can produce, one per mode."""
    return [archive_name(manifest, mode, version) for mode in MODES]
