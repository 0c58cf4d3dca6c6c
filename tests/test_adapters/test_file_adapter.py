"""Tests for FileSystemAdapter implementation."""

from pathlib import Path
from unittest.mock import mock_open, patch

import pytest

from cmakebridge.adapters.file_adapter import FileSystemAdapter, create_file_adapter
from cmakebridge.core.errors import FileSystemError
from cmakebridge.protocols.file_adapter_protocol import FileAdapterProtocol


class TestFileSystemAdapter:
    """Test FileSystemAdapter class."""

    def test_factory_returns_protocol_implementation(self):
        assert isinstance(create_file_adapter(), FileAdapterProtocol)

    def test_read_text_success(self):
        adapter = FileSystemAdapter()

        with patch("pathlib.Path.open", mock_open(read_data="includes=/a\n")):
            result = adapter.read_text(Path("/test/buildinfo_Release.output"))

        assert result == "includes=/a\n"

    def test_read_text_file_not_found(self):
        adapter = FileSystemAdapter()

        with (
            patch("pathlib.Path.open", side_effect=FileNotFoundError("File not found")),
            pytest.raises(
                FileSystemError,
                match="File operation 'read_text' failed on '/nonexistent/file.txt': File not found",
            ),
        ):
            adapter.read_text(Path("/nonexistent/file.txt"))

    def test_read_text_permission_error(self):
        adapter = FileSystemAdapter()

        with (
            patch("pathlib.Path.open", side_effect=PermissionError("Permission denied")),
            pytest.raises(FileSystemError) as exc_info,
        ):
            adapter.read_text(Path("/restricted/file.txt"))

        assert exc_info.value.context["operation"] == "read_text"
        assert exc_info.value.context["error_type"] == "PermissionError"

    def test_write_text_creates_parent_directories(self, tmp_path):
        adapter = FileSystemAdapter()
        path = tmp_path / "generated" / "zlib" / "CMakeLists.txt"

        adapter.write_text(path, "project(zlib_bridge)\n")

        assert path.read_text() == "project(zlib_bridge)\n"

    def test_mkdir_is_idempotent(self, tmp_path):
        adapter = FileSystemAdapter()
        path = tmp_path / "a" / "b"

        adapter.mkdir(path)
        adapter.mkdir(path)

        assert adapter.exists(path)
        assert not adapter.is_file(path)

    def test_get_mtime(self, tmp_path):
        adapter = FileSystemAdapter()
        path = tmp_path / "CMakeLists.txt"
        path.write_text("")

        assert adapter.get_mtime(path) == path.stat().st_mtime

    def test_get_mtime_missing_file(self, tmp_path):
        adapter = FileSystemAdapter()

        with pytest.raises(FileSystemError, match="get_mtime"):
            adapter.get_mtime(tmp_path / "missing.txt")
