from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
FALLBACK_LOG_NAME = "buildpack-packager.log"

# Handlers this module attached to the root logger, and the file they write.
_handlers: List[logging.Handler] = []
_log_file: Optional[str] = None


def _open_log_file(target: Path) -> logging.FileHandler:
    target.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(target, encoding="utf-8")


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Optional[str]:
    """Attach packaging log handlers to the root logger.

    The level is applied on every call; handlers are attached once per
    process. An unwritable log_path falls back to buildpack-packager.log in
    the current directory. Returns the log file in use, if any.
    """
    global _log_file

    root = logging.getLogger()
    root.setLevel(level)
    if _handlers:
        return _log_file

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    fell_back = False
    if log_path:
        try:
            file_handler = _open_log_file(Path(log_path))
        except OSError:
            file_handler = _open_log_file(Path.cwd() / FALLBACK_LOG_NAME)
            fell_back = True
        _log_file = file_handler.baseFilename
        _handlers.append(file_handler)
    if also_console:
        _handlers.append(logging.StreamHandler())

    for handler in _handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if fell_back:
        logging.getLogger(__name__).warning("Could not open %s; logging to %s", log_path, _log_file)
    return _log_file


def reset_logging() -> None:
    """Detach and close the handlers added by configure_logging."""
    global _log_file

    root = logging.getLogger()
    while _handlers:
        handler = _handlers.pop()
        root.removeHandler(handler)
        handler.close()
    _log_file = None
