from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import PackageCtx

logger = logging.getLogger(__name__)


class CheckToolsStep:
    step_id = "10_check_tools"

    def should_run(self, ctx: PackageCtx) -> bool:
        return True

    def run(self, ctx: PackageCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        # Raises MissingTool before any working state or cache entry exists.
        ctx.archiver.ensure_available()
        if ctx.cache is not None:
            ctx.cache.fetcher.ensure_available()
        return state
