from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_tree(src: Path, dst: Path) -> int:
    """Copy everything under src into dst (dotfiles included). Returns the file count."""
    if not src.is_dir():
        raise FileNotFoundError(str(src))

    copied = 0
    dst.mkdir(parents=True, exist_ok=True)
    for item in sorted(src.rglob("*")):
        out = dst / item.relative_to(src)
        if item.is_dir():
            out.mkdir(parents=True, exist_ok=True)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, out)
            copied += 1

    logger.info("Copied %d files %s -> %s", copied, str(src), str(dst))
    return copied
