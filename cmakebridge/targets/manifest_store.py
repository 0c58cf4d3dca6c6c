"""Build manifest and built-marker persistence.

The manifest (``buildinfo_<BuildType>.output``) is written by the generated
project when CMake configures it: one ``key=value`` per line, list values
joined with commas and no escaping. Lines that do not split into exactly one
key and one value are skipped. The built marker (``<BuildType>.built``) holds
a single ISO 8601 timestamp.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path

from cmakebridge.core.errors import FileSystemError
from cmakebridge.core.structlog_logger import get_struct_logger
from cmakebridge.protocols.file_adapter_protocol import FileAdapterProtocol


logger = get_struct_logger(__name__)

MANIFEST_KEYS = (
    "includes",
    "libraries",
    "binaryDirectories",
    "dependencies",
    "sourceDependencies",
    "sourcePath",
    "cppStandard",
)


def parse_manifest(text: str) -> dict[str, str]:
    """Parse manifest text into a key/value mapping.

    Later duplicates of a key replace earlier ones.
    """
    values: dict[str, str] = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        tokens = line.split("=")
        if len(tokens) != 2:
            if line.strip():
                logger.debug("manifest_line_skipped", line=line_number, content=line)
            continue
        values[tokens[0]] = tokens[1]
    return values


def format_manifest(values: Mapping[str, str]) -> str:
    return "".join(f"{key}={value}\n" for key, value in values.items())


def split_list(value: str) -> list[str]:
    """Split a comma-joined manifest value, dropping empty tokens."""
    return [token for token in value.split(",") if token]


def truncate_to_seconds(timestamp: datetime) -> datetime:
    return timestamp.replace(microsecond=0)


def timestamp_from_mtime(mtime: float) -> datetime:
    return datetime.fromtimestamp(mtime, tz=timezone.utc)


class ManifestStore:
    """Reads manifests and reads/writes built markers."""

    def __init__(self, file_adapter: FileAdapterProtocol):
        self.file_adapter = file_adapter

    def read_manifest(self, path: Path) -> dict[str, str] | None:
        """Read a manifest file.

        Returns:
            The parsed mapping, or None when the file does not exist
        """
        if not self.file_adapter.is_file(path):
            logger.debug("manifest_not_found", path=str(path))
            return None
        values = parse_manifest(self.file_adapter.read_text(path))
        logger.debug("manifest_loaded", path=str(path), keys=sorted(values))
        return values

    def write_manifest(self, path: Path, values: Mapping[str, str]) -> None:
        self.file_adapter.write_text(path, format_manifest(values))

    def read_built_marker(self, path: Path) -> datetime | None:
        """Read the timestamp stored in a built marker.

        An unreadable or unparsable marker is treated as absent so the next
        run reconfigures instead of failing.
        """
        if not self.file_adapter.is_file(path):
            return None
        try:
            text = self.file_adapter.read_text(path).strip()
            return datetime.fromisoformat(text)
        except (FileSystemError, ValueError) as e:
            logger.warning("built_marker_unreadable", path=str(path), error=str(e))
            return None

    def write_built_marker(self, path: Path, timestamp: datetime) -> None:
        """Overwrite the marker with the canonical form of ``timestamp``."""
        self.file_adapter.write_text(path, timestamp.isoformat())
        logger.debug("built_marker_written", path=str(path), timestamp=timestamp.isoformat())


def create_manifest_store(
    file_adapter: FileAdapterProtocol | None = None,
) -> ManifestStore:
    if file_adapter is None:
        from cmakebridge.adapters.file_adapter import create_file_adapter

        file_adapter = create_file_adapter()
    return ManifestStore(file_adapter)
