from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .cache import DependencyCache
from .lib.archiver import Archiver
from .options import PackagingOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageCtx:
    options: PackagingOptions
    archiver: Archiver
    # None in uncached mode: the cache is never touched there.
    cache: Optional[DependencyCache]

    @property
    def root_dir(self) -> Path:
        return self.options.root_dir


class Step(Protocol):
    """A single packaging step."""

    step_id: str

    def should_run(self, ctx: PackageCtx) -> bool:
        ...

    def run(self, ctx: PackageCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    skipped_steps: List[str]


def run_pipeline(
    *,
    ctx: PackageCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
) -> PipelineResult:
    """Run steps in order; the first exception aborts the remaining steps."""

    ran: List[str] = []
    skipped: List[str] = []

    for step in steps:
        state["current_step"] = step.step_id

        if not step.should_run(ctx):
            logger.info("Skipping step %s (not enabled for this %s run)", step.step_id, ctx.options.mode)
            skipped.append(step.step_id)
            continue

        logger.info("Running step %s", step.step_id)
        state = step.run(ctx, state)
        ran.append(step.step_id)

    state["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, skipped_steps=skipped)
