from __future__ import annotations

import logging
from typing import Any, Dict

from ..excludes import build_exclude_patterns
from ..naming import archive_name, artifact_names
from ..pipeline import PackageCtx

logger = logging.getLogger(__name__)


class AssembleArchiveStep:
    step_id = "50_assemble_archive"

    def should_run(self, ctx: PackageCtx) -> bool:
        return True

    def run(self, ctx: PackageCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        manifest = state["manifest"]
        version = state["version"]

        archive_path = ctx.root_dir / archive_name(manifest, ctx.options.mode, version)
        patterns = build_exclude_patterns(manifest.exclude_files)
        # Artifacts from earlier runs were copied along with root_dir.
        patterns += artifact_names(manifest, version)

        if archive_path.exists():
            logger.info("Removing previous artifact %s", archive_path.name)
            archive_path.unlink()

        try:
            ctx.archiver.write(state["work_dir"], archive_path, patterns)
        except Exception:
            archive_path.unlink(missing_ok=True)
            raise

        state["archive_path"] = archive_path
        return state
