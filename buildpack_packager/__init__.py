"""Buildpack packager.

Packages a buildpack directory into a zip archive, optionally bundling the
manifest's pinned dependencies for offline installs:
- Typed, validated packaging options
- Manifest loading and deprecated-manifest merging
- Persistent, checksum-verified dependency cache
- Deterministic archive naming and exclusions
"""

from .errors import (
    BuildpackVersionError,
    ChecksumMismatch,
    FetchError,
    InvalidOptions,
    ManifestLanguageMismatch,
    ManifestParseError,
    MissingTool,
    PackagerError,
    UnreachableDependency,
)
from .options import PackagingOptions
from .packager import Packager, PackagingResult, package

__all__ = [
    "BuildpackVersionError",
    "ChecksumMismatch",
    "FetchError",
    "InvalidOptions",
    "ManifestLanguageMismatch",
    "ManifestParseError",
    "MissingTool",
    "PackagerError",
    "UnreachableDependency",
    "PackagingOptions",
    "Packager",
    "PackagingResult",
    "package",
]
