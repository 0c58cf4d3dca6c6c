"""Exception hierarchy for cmakebridge."""

from typing import Any


class CMakeBridgeError(Exception):
    """Base exception for all cmakebridge errors.

    Carries an optional context dictionary that is included in structured
    log output when the error is reported.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __str__(self) -> str:
        return self.message


class ConfigError(CMakeBridgeError):
    """Raised when configuration cannot be loaded or is invalid."""


class FileSystemError(CMakeBridgeError):
    """Raised when a file system operation fails."""


class TemplateError(CMakeBridgeError):
    """Raised when a descriptor template cannot be read or rendered."""


class BuildError(CMakeBridgeError):
    """Base class for failures of the external build pipeline."""


class UnsupportedPlatformError(BuildError):
    """Raised when the target platform has no generator mapping."""

    def __init__(self, platform: str):
        super().__init__(
            f"Platform '{platform}' is not supported", {"platform": platform}
        )
        self.platform = platform


class ConfigureFailedError(BuildError):
    """Raised when the configure step exits with a non-zero code."""

    def __init__(self, exit_code: int):
        super().__init__(
            f"configure failed, exit code {exit_code}", {"exit_code": exit_code}
        )
        self.exit_code = exit_code


class BuildFailedError(BuildError):
    """Raised when the build step exits with a non-zero code."""

    def __init__(self, exit_code: int):
        super().__init__(
            f"build failed, exit code {exit_code}", {"exit_code": exit_code}
        )
        self.exit_code = exit_code


class ManifestMissingError(BuildError):
    """Raised when the external build did not produce a manifest file."""

    def __init__(self, path: str):
        super().__init__(f"Build manifest not found: {path}", {"path": path})
        self.path = path


__all__ = [
    "CMakeBridgeError",
    "ConfigError",
    "FileSystemError",
    "TemplateError",
    "BuildError",
    "UnsupportedPlatformError",
    "ConfigureFailedError",
    "BuildFailedError",
    "ManifestMissingError",
]
