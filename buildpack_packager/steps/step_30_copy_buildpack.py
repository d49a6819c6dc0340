from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.assets import copy_tree
from ..manifest import write_manifest
from ..pipeline import PackageCtx

logger = logging.getLogger(__name__)


class CopyBuildpackStep:
    step_id = "30_copy_buildpack"

    def should_run(self, ctx: PackageCtx) -> bool:
        return True

    def run(self, ctx: PackageCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        work_dir = state["work_dir"]

        # Unfiltered; exclusions are applied when the archive is written.
        copy_tree(ctx.root_dir, work_dir)

        if state.get("merged_manifest"):
            target = work_dir / ctx.options.manifest_file.name
            write_manifest(state["manifest"], target)
            logger.info("Wrote merged manifest to working copy (%s)", target.name)
        return state
