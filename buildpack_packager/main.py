from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import PackagerError
from .logging_utils import configure_logging
from .naming import MODE_CACHED, MODES
from .options import PackagingOptions, default_cache_dir, load_options_file, options_from_mapping
from .packager import PackagingResult, package

logger = logging.getLogger(__name__)


def run(options: PackagingOptions, *, log_path: Optional[str] = None, verbose: bool = False) -> PackagingResult:
    """Configure logging and run one packaging pass."""

    configure_logging(log_path=log_path, level=logging.DEBUG if verbose else logging.INFO)
    try:
        return package(options)
    except PackagerError:
        raise
    except Exception:
        logger.exception("Packaging failed unexpectedly")
        raise


def options_from_args(args: argparse.Namespace) -> PackagingOptions:
    raw: Dict[str, Any] = {}
    base_dir = Path.cwd()
    if args.config:
        raw = load_options_file(args.config)
        base_dir = Path(args.config).absolute().parent

    raw["mode"] = args.mode
    cli_paths = {
        "root_dir": args.root_dir,
        "manifest_path": args.manifest,
        "cache_dir": args.cache_dir,
        "deprecated_manifest_path": args.deprecated_manifest,
    }
    for key, value in cli_paths.items():
        if value is not None:
            raw[key] = Path(value).expanduser().absolute()

    if args.force_download:
        raw["force_download"] = True
    if args.use_deprecated_manifest:
        raw["include_deprecated_manifest"] = True
    if args.check_uris:
        raw["check_dependency_uris"] = True
    if args.timeout is not None:
        raw["command_timeout"] = args.timeout

    # The user-scoped default is resolved here, never inside the packager.
    if args.mode == MODE_CACHED and raw.get("cache_dir") is None:
        raw["cache_dir"] = default_cache_dir()

    return options_from_mapping(raw, base_dir=base_dir)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="buildpack-packager")
    p.add_argument("mode", choices=MODES, help="cached bundles dependencies for offline installs")
    p.add_argument("--root-dir", default=None, help="Buildpack directory (default: current directory)")
    p.add_argument("--manifest", default=None, help="Manifest path (default: <root-dir>/manifest.yml)")
    p.add_argument("--cache-dir", default=None, help="Dependency cache (default: ~/.buildpack-packager/cache)")
    p.add_argument("--force-download", action="store_true", help="Re-fetch dependencies even if cached")
    p.add_argument(
        "--use-deprecated-manifest",
        action="store_true",
        help="Merge the deprecated manifest's dependencies and exclusions",
    )
    p.add_argument("--deprecated-manifest", default=None, help="Path to the deprecated manifest")
    p.add_argument("--check-uris", action="store_true", help="Verify every dependency URI is reachable first")
    p.add_argument("--timeout", type=float, default=None, help="Timeout in seconds for each zip/curl call")
    p.add_argument("--config", default=None, help="YAML file with packaging options")
    p.add_argument("--log", default=None, help="Also write the log to this file")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    try:
        options = options_from_args(args)
        result = run(options, log_path=args.log, verbose=bool(args.verbose))
    except PackagerError as e:
        configure_logging(log_path=args.log)
        logger.error("%s", e)
        return 1

    print(str(result.archive_path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
