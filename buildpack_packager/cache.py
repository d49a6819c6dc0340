"""Persistent, URI-keyed store of verified dependency files.

Entries live flat under the cache directory, one file per distinct URI,
and are never pruned. An entry is only handed out after its MD5 matches the
manifest; a stale entry gets exactly one re-fetch before the run fails.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
from pathlib import Path

from .errors import ChecksumMismatch
from .lib.fetcher import Fetcher
from .manifest import Dependency

logger = logging.getLogger(__name__)

MAX_REFETCHES = 1

_RESERVED = re.compile(r"[:/]")


def uri_cache_path(uri: str) -> str:
    """Filesystem-safe cache key for a URI (`:` and `/` become `_`)."""
    return _RESERVED.sub("_", uri)


def file_md5(path: Path, *, chunk_size: int = 1024 * 1024) -> str:
    h = hashlib.md5()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


class DependencyCache:
    def __init__(self, cache_dir: Path, fetcher: Fetcher) -> None:
        self.cache_dir = cache_dir
        self.fetcher = fetcher

    def path_for(self, dependency: Dependency) -> Path:
        return self.cache_dir / uri_cache_path(dependency.uri)

    def resolve(self, dependency: Dependency, *, force_download: bool = False) -> Path:
        """Return a cached file whose MD5 equals dependency.md5, fetching as needed."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        cached_file = self.path_for(dependency)

        fresh = False
        if force_download or not cached_file.exists():
            self._download(dependency, cached_file)
            fresh = True
        else:
            logger.info("Using cached %s %s (%s)", dependency.name, dependency.version, cached_file.name)

        refetches = 0
        while True:
            actual = file_md5(cached_file)
            if actual == dependency.md5:
                return cached_file

            if fresh or refetches >= MAX_REFETCHES:
                cached_file.unlink(missing_ok=True)
                raise ChecksumMismatch(
                    name=dependency.name,
                    version=dependency.version,
                    uri=dependency.uri,
                    expected=dependency.md5,
                    actual=actual,
                )

            logger.warning(
                "Cached %s %s has checksum %s (expected %s); fetching again",
                dependency.name,
                dependency.version,
                actual,
                dependency.md5,
            )
            cached_file.unlink()
            self._download(dependency, cached_file)
            fresh = True
            refetches += 1

    def _download(self, dependency: Dependency, cached_file: Path) -> None:
        # Fetch next to the entry and rename into place so concurrent runs
        # sharing this cache never read a partially written file.
        partial = cached_file.with_name(f".{cached_file.name}.{os.getpid()}.partial")
        logger.info("Fetching %s %s from %s", dependency.name, dependency.version, dependency.uri)
        try:
            self.fetcher.fetch(dependency.uri, partial)
            os.replace(partial, cached_file)
        finally:
            partial.unlink(missing_ok=True)
