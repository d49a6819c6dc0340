from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional, Protocol

from ..errors import FetchError, MissingTool
from .command import CommandError, run_cmd

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Downloads the bytes behind a URI into a local file."""

    def ensure_available(self) -> None:
        ...

    def fetch(self, uri: str, destination: Path) -> None:
        ...


class CurlFetcher:
    """Fetcher backed by `curl`; follows redirects and fails on HTTP errors."""

    tool = "curl"
    install_hint = "apt-get install curl"

    def __init__(self, *, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def ensure_available(self) -> None:
        if shutil.which(self.tool) is None:
            raise MissingTool(self.tool, hint=self.install_hint)

    def fetch(self, uri: str, destination: Path) -> None:
        argv = [self.tool, uri, "-o", str(destination), "-L", "--fail", "--silent", "--show-error"]
        try:
            run_cmd(argv, timeout=self.timeout)
        except CommandError as e:
            raise FetchError(uri, e.stderr.strip() or str(e)) from e
