from __future__ import annotations

import logging
from typing import Any, Dict

from ..manifest import load_manifest, merge_manifests
from ..naming import read_buildpack_version
from ..pipeline import PackageCtx

logger = logging.getLogger(__name__)


class LoadManifestStep:
    step_id = "20_load_manifest"

    def should_run(self, ctx: PackageCtx) -> bool:
        return True

    def run(self, ctx: PackageCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        opts = ctx.options
        version = read_buildpack_version(ctx.root_dir)
        manifest = load_manifest(opts.manifest_file, version=version)

        merged = False
        if opts.include_deprecated_manifest and opts.deprecated_manifest_path is not None:
            deprecated = load_manifest(opts.deprecated_manifest_path, version=version)
            manifest = merge_manifests(manifest, deprecated)
            merged = True
            logger.info(
                "Merged %s into %s (%d dependencies total)",
                deprecated.source,
                manifest.source,
                len(manifest.dependencies),
            )

        state["version"] = version
        state["manifest"] = manifest
        state["merged_manifest"] = merged
        return state
