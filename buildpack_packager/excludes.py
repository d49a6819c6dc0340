from __future__ import annotations

from typing import Iterable, List


def build_exclude_patterns(patterns: Iterable[str]) -> List[str]:
    """Turn manifest exclude_files entries into archiver wildcard patterns.

    "logs/"   -> "logs/*", "*/logs/*"   (directory, at the root and nested)
    "VERSION" -> "VERSION", "*/VERSION" (file name, at the root and nested)
    """

    out: List[str] = []
    for pattern in patterns:
        if pattern.endswith("/"):
            out += [f"{pattern}*", f"*/{pattern}*"]
        else:
            out += [pattern, f"*/{pattern}"]
    return out
