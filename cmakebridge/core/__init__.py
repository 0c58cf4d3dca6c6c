from .errors import (
    BuildError,
    BuildFailedError,
    CMakeBridgeError,
    ConfigError,
    ConfigureFailedError,
    FileSystemError,
    ManifestMissingError,
    TemplateError,
    UnsupportedPlatformError,
)
from .logging import get_logger, setup_logging


__all__ = [
    "setup_logging",
    "get_logger",
    "CMakeBridgeError",
    "ConfigError",
    "FileSystemError",
    "TemplateError",
    "BuildError",
    "BuildFailedError",
    "ConfigureFailedError",
    "ManifestMissingError",
    "UnsupportedPlatformError",
]
