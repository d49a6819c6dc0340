"""Shared pytest fixtures for buildpack_packager tests."""

from __future__ import annotations

import fnmatch
import hashlib
import zipfile
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import pytest
import yaml

from buildpack_packager.errors import FetchError, MissingTool

DEP_URI = "https://example.com/deps/etc_host-1.0.tgz"
DEP_BYTES = b"contents!"
DEPRECATED_URI = "https://example.com/deps/etc_host-0.9.tgz"
DEPRECATED_BYTES = b"deprecated contents!"

BUILDPACK_FILES = ["VERSION", "README.md", "lib/sai.to", "lib/rash", ".gitignore"]


def md5_of(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


def write_yaml(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


def manifest_data(
    *,
    language: str = "sample",
    uri: str = DEP_URI,
    md5: str | None = None,
    exclude_files: List[str] | None = None,
) -> dict:
    return {
        "language": language,
        "exclude_files": [".gitignore"] if exclude_files is None else exclude_files,
        "url_to_dependency_map": [{"match": "ruby-(\\d+\\.\\d+\\.\\d+)", "name": "ruby", "version": "$1"}],
        "dependencies": [
            {"name": "etc_host", "version": "1.0", "uri": uri, "md5": md5 or md5_of(DEP_BYTES)},
        ],
    }


class FakeFetcher:
    """Serves bytes from a dict and records every fetched URI."""

    def __init__(self, sources: Dict[str, bytes] | None = None, *, available: bool = True) -> None:
        self.sources: Dict[str, bytes] = dict(sources or {})
        self.available = available
        self.calls: List[str] = []

    def ensure_available(self) -> None:
        if not self.available:
            raise MissingTool("curl", hint="apt-get install curl")

    def fetch(self, uri: str, destination: Path) -> None:
        self.calls.append(uri)
        if uri not in self.sources:
            raise FetchError(uri, "404 Not Found")
        destination.write_bytes(self.sources[uri])


class FakeArchiver:
    """Writes a real zip with fnmatch-based exclusions (zip's `*` also spans `/`)."""

    def __init__(self, *, available: bool = True, fail: bool = False) -> None:
        self.available = available
        self.fail = fail
        self.calls: List[Tuple[List[str], Path, List[str]]] = []
        self.source_dirs: List[Path] = []

    def ensure_available(self) -> None:
        if not self.available:
            raise MissingTool("zip", hint="apt-get install zip")

    def write(self, source_dir: Path, output_path: Path, exclude_patterns: Sequence[str]) -> None:
        names = sorted(
            p.relative_to(source_dir).as_posix()
            for p in source_dir.rglob("*")
            if p.is_file()
        )
        kept = [n for n in names if not any(fnmatch.fnmatchcase(n, pat) for pat in exclude_patterns)]
        self.source_dirs.append(source_dir)
        self.calls.append((kept, output_path, list(exclude_patterns)))
        if self.fail:
            output_path.write_bytes(b"partial")
            raise RuntimeError("archiver exploded")
        with zipfile.ZipFile(output_path, "w") as zf:
            for n in kept:
                zf.write(source_dir / n, n)


def zip_entries(path: Path) -> List[str]:
    with zipfile.ZipFile(path) as zf:
        return sorted(n for n in zf.namelist() if not n.endswith("/"))


@pytest.fixture
def buildpack_dir(tmp_path: Path) -> Path:
    root = tmp_path / "sample-buildpack-root-dir"
    for rel in BUILDPACK_FILES:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("a\n", encoding="utf-8")
    (root / "VERSION").write_text("1.2.3\n", encoding="utf-8")
    write_yaml(root / "manifest.yml", manifest_data())
    return root


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache-dir"


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher({DEP_URI: DEP_BYTES, DEPRECATED_URI: DEPRECATED_BYTES})


@pytest.fixture
def archiver() -> FakeArchiver:
    return FakeArchiver()
