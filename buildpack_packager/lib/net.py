from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlsplit

from .command import run_cmd

logger = logging.getLogger(__name__)


def _http_status(argv: list[str], *, timeout: Optional[float]) -> int:
    r = run_cmd(argv, check=False, timeout=timeout)
    try:
        return int(r.stdout.strip() or 0)
    except ValueError:
        return 0


def uri_reachable(uri: str, *, timeout: Optional[float] = None) -> bool:
    """Best-effort reachability check for a dependency URI.

    http(s): HEAD first; servers that reject HEAD get a one byte ranged GET.
    file: the referenced path must exist.
    """

    parts = urlsplit(uri)
    if parts.scheme == "file":
        return Path(unquote(parts.path)).exists()
    if parts.scheme not in {"http", "https"}:
        logger.warning("Unsupported scheme for reachability check: %s", uri)
        return False

    base = ["curl", "--silent", "--location", "--output", os.devnull, "--write-out", "%{http_code}"]
    status = _http_status([*base, "--head", uri], timeout=timeout)
    if status == 200:
        return True

    logger.debug("HEAD %s returned %s; retrying with GET", uri, status)
    status = _http_status([*base, "--range", "0-0", uri], timeout=timeout)
    return status in {200, 206}
