from __future__ import annotations


class PackagerError(RuntimeError):
    """Base class for every error that aborts a packaging run."""


class InvalidOptions(PackagerError, ValueError):
    pass


class ManifestParseError(PackagerError):
    pass


class ManifestLanguageMismatch(PackagerError):
    def __init__(
        self,
        *,
        primary: str,
        deprecated: str,
        primary_language: str,
        deprecated_language: str,
    ) -> None:
        self.primary = primary
        self.deprecated = deprecated
        self.primary_language = primary_language
        self.deprecated_language = deprecated_language
        super().__init__(
            f"Language specified in {primary} and {deprecated} do not match "
            f"({primary_language!r} != {deprecated_language!r})."
        )


class BuildpackVersionError(PackagerError):
    pass


class MissingTool(PackagerError):
    def __init__(self, tool: str, hint: str | None = None) -> None:
        self.tool = tool
        self.hint = hint
        msg = f"{tool} is not installed"
        if hint:
            msg += f"\nTry: {hint}\nAnd then rerun"
        super().__init__(msg)


class FetchError(PackagerError):
    def __init__(self, uri: str, reason: str) -> None:
        self.uri = uri
        self.reason = reason
        super().__init__(f"Failed to fetch {uri}: {reason}")


class ChecksumMismatch(PackagerError):
    def __init__(self, *, name: str, version: str, uri: str, expected: str, actual: str) -> None:
        self.name = name
        self.version = version
        self.uri = uri
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"File: {name}, version: {version} downloaded at location {uri}\n"
            f"\tis reporting a different checksum than the one specified in the manifest "
            f"(expected {expected}, got {actual})."
        )


class UnreachableDependency(PackagerError):
    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f"Error while validating manifest: invalid uri: {uri}")
