from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List

from ..pipeline import PackageCtx

logger = logging.getLogger(__name__)

DEPENDENCIES_DIR = "dependencies"


class MaterializeDependenciesStep:
    step_id = "40_materialize_dependencies"

    def should_run(self, ctx: PackageCtx) -> bool:
        return ctx.options.cached

    def run(self, ctx: PackageCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        if ctx.cache is None:
            raise RuntimeError("dependency cache missing for a cached run")
        dependency_dir = state["work_dir"] / DEPENDENCIES_DIR
        dependency_dir.mkdir(parents=True, exist_ok=True)

        copied: List[Path] = []
        for dependency in state["manifest"].dependencies:
            cached_file = ctx.cache.resolve(dependency, force_download=ctx.options.force_download)
            out = dependency_dir / cached_file.name
            shutil.copy2(cached_file, out)
            copied.append(out)

        logger.info("Bundled %d dependencies", len(copied))
        state["dependency_files"] = copied
        return state
