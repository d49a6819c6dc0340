from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional, Protocol, Sequence

from ..errors import MissingTool
from .command import run_cmd

logger = logging.getLogger(__name__)


class Archiver(Protocol):
    """Writes the contents of a directory into a single archive file."""

    def ensure_available(self) -> None:
        ...

    def write(self, source_dir: Path, output_path: Path, exclude_patterns: Sequence[str]) -> None:
        ...


class ZipArchiver:
    """Archiver backed by the `zip` command line tool.

    Entries are stored relative to source_dir. Exclude patterns use zip's
    own wildcard rules (`*` also matches `/`).
    """

    tool = "zip"
    install_hint = "apt-get install zip"

    def __init__(self, *, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def ensure_available(self) -> None:
        if shutil.which(self.tool) is None:
            raise MissingTool(self.tool, hint=self.install_hint)

    def write(self, source_dir: Path, output_path: Path, exclude_patterns: Sequence[str]) -> None:
        argv = [self.tool, "-r", "-q", str(output_path), "."]
        argv += [f"--exclude={p}" for p in exclude_patterns]
        run_cmd(argv, cwd=str(source_dir), timeout=self.timeout)
        logger.info("Wrote archive %s", str(output_path))
