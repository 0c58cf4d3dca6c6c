"""File adapter for abstracting file system operations."""

import logging
from pathlib import Path

from cmakebridge.core.errors import FileSystemError
from cmakebridge.protocols.file_adapter_protocol import FileAdapterProtocol
from cmakebridge.utils.error_utils import create_file_error


logger = logging.getLogger(__name__)


class FileSystemAdapter:
    """File system adapter implementation."""

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        try:
            logger.debug("Reading text file: %s", path)
            with path.open(mode="r", encoding=encoding) as f:
                content = f.read()
            logger.debug("Successfully read %d characters from %s", len(content), path)
            return content
        except FileNotFoundError as e:
            error = create_file_error(path, "read_text", e, {"encoding": encoding})
            logger.error("File not found: %s", path)
            raise error from e
        except PermissionError as e:
            error = create_file_error(path, "read_text", e, {"encoding": encoding})
            logger.error("Permission denied reading file: %s", path)
            raise error from e
        except (OSError, UnicodeDecodeError) as e:
            error = create_file_error(path, "read_text", e, {"encoding": encoding})
            logger.error("Error reading file %s: %s", path, e)
            raise error from e

    def write_text(self, path: Path, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        try:
            self.mkdir(path.parent)

            logger.debug("Writing text file: %s", path)
            with path.open(mode="w", encoding=encoding) as f:
                f.write(content)
            logger.debug("Successfully wrote %d characters to %s", len(content), path)
        except FileSystemError:
            raise
        except PermissionError as e:
            error = create_file_error(
                path,
                "write_text",
                e,
                {"encoding": encoding, "content_length": len(content)},
            )
            logger.error("Permission denied writing file: %s", path)
            raise error from e
        except OSError as e:
            error = create_file_error(
                path,
                "write_text",
                e,
                {"encoding": encoding, "content_length": len(content)},
            )
            logger.error("Error writing file %s: %s", path, e)
            raise error from e

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()

    def is_file(self, path: Path) -> bool:
        """Check if a path is a file."""
        return path.is_file()

    def mkdir(self, path: Path, parents: bool = True, exist_ok: bool = True) -> None:
        """Create a directory."""
        try:
            path.mkdir(parents=parents, exist_ok=exist_ok)
        except PermissionError as e:
            error = create_file_error(
                path, "mkdir", e, {"parents": parents, "exist_ok": exist_ok}
            )
            logger.error("Permission denied creating directory: %s", path)
            raise error from e
        except OSError as e:
            error = create_file_error(
                path, "mkdir", e, {"parents": parents, "exist_ok": exist_ok}
            )
            logger.error("Error creating directory %s: %s", path, e)
            raise error from e

    def get_mtime(self, path: Path) -> float:
        """Return the modification time of a path."""
        try:
            return path.stat().st_mtime
        except OSError as e:
            error = create_file_error(path, "get_mtime", e)
            logger.error("Cannot stat %s: %s", path, e)
            raise error from e


def create_file_adapter() -> FileAdapterProtocol:
    """Factory function to create a FileSystemAdapter instance."""
    return FileSystemAdapter()
