"""Packaging run orchestration.

A run is strictly linear:

    check archiver -> load/merge manifest -> (check URIs) -> stage working copy
    -> copy buildpack -> (bundle dependencies) -> write archive -> cleanup

Nothing is written before the manifest has been loaded and merged, and the
working copy is removed on every exit path.
"""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .cache import DependencyCache
from .lib.archiver import Archiver, ZipArchiver
from .lib.fetcher import CurlFetcher, Fetcher
from .manifest import Manifest
from .options import PackagingOptions
from .pipeline import PackageCtx, Step, run_pipeline
from .steps import (
    AssembleArchiveStep,
    CheckToolsStep,
    CheckDependencyUrisStep,
    CopyBuildpackStep,
    LoadManifestStep,
    MaterializeDependenciesStep,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackagingResult:
    archive_path: Path
    manifest: Manifest
    # Names under dependencies/ in the archive; the working copy is gone by now.
    dependency_files: List[str]
    ran_steps: List[str]
    skipped_steps: List[str]


def preflight_steps() -> List[Step]:
    return [
        CheckToolsStep(),
        LoadManifestStep(),
        CheckDependencyUrisStep(),
    ]


def staged_steps() -> List[Step]:
    return [
        CopyBuildpackStep(),
        MaterializeDependenciesStep(),
        AssembleArchiveStep(),
    ]


class Packager:
    def __init__(
        self,
        options: PackagingOptions,
        *,
        archiver: Optional[Archiver] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        self.options = options
        self.archiver = archiver or ZipArchiver(timeout=options.command_timeout)
        self.fetcher = fetcher or CurlFetcher(timeout=options.command_timeout)

    def _ctx(self) -> PackageCtx:
        cache = None
        if self.options.cached and self.options.cache_dir is not None:
            cache = DependencyCache(self.options.cache_dir, self.fetcher)
        return PackageCtx(options=self.options, archiver=self.archiver, cache=cache)

    def execute(self) -> PackagingResult:
        ctx = self._ctx()
        state: Dict[str, Any] = {}
        logger.info("Packaging %s (%s)", str(self.options.root_dir), self.options.mode)

        pre = run_pipeline(ctx=ctx, state=state, steps=preflight_steps())

        with tempfile.TemporaryDirectory(prefix="buildpack-packager-") as tmp:
            state = pre.state
            state["work_dir"] = Path(tmp)
            staged = run_pipeline(ctx=ctx, state=state, steps=staged_steps())

        state = staged.state
        logger.info("Created %s", str(state["archive_path"]))
        return PackagingResult(
            archive_path=state["archive_path"],
            manifest=state["manifest"],
            dependency_files=[p.name for p in state.get("dependency_files") or []],
            ran_steps=pre.ran_steps + staged.ran_steps,
            skipped_steps=pre.skipped_steps + staged.skipped_steps,
        )


def package(
    options: PackagingOptions,
    *,
    archiver: Optional[Archiver] = None,
    fetcher: Optional[Fetcher] = None,
) -> PackagingResult:
    return Packager(options, archiver=archiver, fetcher=fetcher).execute()
