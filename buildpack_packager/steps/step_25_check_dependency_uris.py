from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import UnreachableDependency
from ..lib.net import uri_reachable
from ..pipeline import PackageCtx

logger = logging.getLogger(__name__)


class CheckDependencyUrisStep:
    step_id = "25_check_dependency_uris"

    def should_run(self, ctx: PackageCtx) -> bool:
        return ctx.options.check_dependency_uris

    def run(self, ctx: PackageCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        for dependency in state["manifest"].dependencies:
            if not uri_reachable(dependency.uri, timeout=ctx.options.command_timeout):
                raise UnreachableDependency(dependency.uri)
            logger.debug("Reachable: %s", dependency.uri)
        return state
