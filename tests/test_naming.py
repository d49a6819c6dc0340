"""Tests for archive naming and exclude pattern generation."""

from pathlib import Path

import pytest

from buildpack_packager.errors import BuildpackVersionError
from buildpack_packager.excludes import build_exclude_patterns
from buildpack_packager.manifest import Manifest
from buildpack_packager.naming import (
    MODE_CACHED,
    MODE_UNCACHED,
    archive_name,
    artifact_names,
    read_buildpack_version,
)


class TestArchiveName:
    def test_uncached_name(self):
        assert archive_name(Manifest(language="sample"), MODE_UNCACHED, "1.2.3") == "sample_buildpack-v1.2.3.zip"

    def test_cached_name(self):
        assert archive_name(Manifest(language="sample"), MODE_CACHED, "1.2.3") == "sample_buildpack-cached-v1.2.3.zip"

    def test_artifact_names_cover_both_modes(self):
        assert artifact_names(Manifest(language="go"), "0.1") == [
            "go_buildpack-v0.1.zip",
            "go_buildpack-cached-v0.1.zip",
        ]


class TestVersion:
    def test_version_is_trimmed(self, tmp_path: Path):
        (tmp_path / "VERSION").write_text("  1.2.3\n\n", encoding="utf-8")
        assert read_buildpack_version(tmp_path) == "1.2.3"

    def test_missing_version_file(self, tmp_path: Path):
        with pytest.raises(BuildpackVersionError):
            read_buildpack_version(tmp_path)

    def test_empty_version_file(self, tmp_path: Path):
        (tmp_path / "VERSION").write_text("\n", encoding="utf-8")
        with pytest.raises(BuildpackVersionError):
            read_buildpack_version(tmp_path)


class TestExcludes:
    def test_directory_pattern_matches_root_and_nested(self):
        assert build_exclude_patterns(["logs/"]) == ["logs/*", "*/logs/*"]

    def test_file_pattern_matches_name_at_root_and_nested(self):
        assert build_exclude_patterns(["VERSION"]) == ["VERSION", "*/VERSION"]

    def test_order_is_preserved_and_nothing_is_deduplicated(self):
        assert build_exclude_patterns([".git/", "*.log", ".git/"]) == [
            ".git/*",
            "*/.git/*",
            "*.log",
            "*/*.log",
            ".git/*",
            "*/.git/*",
        ]

    def test_empty(self):
        assert build_exclude_patterns([]) == []
