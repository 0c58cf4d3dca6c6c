"""Protocol for file system operations."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileAdapterProtocol(Protocol):
    """Protocol for the file system operations the pipeline performs."""

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        """Read text content from a file.

        Raises:
            FileSystemError: If the file cannot be read
        """
        ...

    def write_text(self, path: Path, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file, creating parent directories.

        Raises:
            FileSystemError: If the file cannot be written
        """
        ...

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def is_file(self, path: Path) -> bool:
        """Check if a path is a file."""
        ...

    def mkdir(self, path: Path, parents: bool = True, exist_ok: bool = True) -> None:
        """Create a directory.

        Raises:
            FileSystemError: If the directory cannot be created
        """
        ...

    def get_mtime(self, path: Path) -> float:
        """Return the modification time of ``path`` as a POSIX timestamp.

        Raises:
            FileSystemError: If the path cannot be stat'ed
        """
        ...
