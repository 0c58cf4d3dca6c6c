"""Tests for TemplateAdapter implementation."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from cmakebridge.adapters.template_adapter import TemplateAdapter, create_template_adapter
from cmakebridge.core.errors import FileSystemError, TemplateError
from cmakebridge.protocols.template_adapter_protocol import TemplateAdapterProtocol


class TestTemplateAdapter:
    """Test literal placeholder substitution."""

    def test_factory_returns_protocol_implementation(self):
        assert isinstance(create_template_adapter(), TemplateAdapterProtocol)

    def test_render_string(self):
        adapter = TemplateAdapter(file_adapter=Mock())

        result = adapter.render_string(
            "project(@BUILD_TARGET_NAME@) # @BUILD_TARGET_NAME@",
            {"BUILD_TARGET_NAME": "zlib"},
        )

        assert result == "project(zlib) # zlib"

    def test_unknown_placeholders_are_left_alone(self):
        adapter = TemplateAdapter(file_adapter=Mock())

        result = adapter.render_string("@CMAKE_VAR@ @KNOWN@", {"KNOWN": "x"})

        assert result == "@CMAKE_VAR@ x"

    def test_render_template_writes_output(self, mock_file_adapter):
        mock_file_adapter.read_text.return_value = "set(USE_COMPILER @USE_COMPILER@)\n"
        adapter = TemplateAdapter(file_adapter=mock_file_adapter)

        result = adapter.render_template(
            Path("/t/unix_toolchain.in"),
            {"USE_COMPILER": "1"},
            output_path=Path("/out/toolchain.cmake"),
            append="set(EXTRA 1)\n",
        )

        assert result == "set(USE_COMPILER 1)\nset(EXTRA 1)\n"
        mock_file_adapter.write_text.assert_called_once_with(
            Path("/out/toolchain.cmake"), result
        )

    def test_render_template_without_output(self, mock_file_adapter):
        mock_file_adapter.read_text.return_value = "@A@"
        adapter = TemplateAdapter(file_adapter=mock_file_adapter)

        assert adapter.render_template(Path("/t/x.in"), {"A": "b"}) == "b"
        mock_file_adapter.write_text.assert_not_called()

    def test_missing_template(self, mock_file_adapter):
        mock_file_adapter.read_text.side_effect = FileSystemError("missing")
        adapter = TemplateAdapter(file_adapter=mock_file_adapter)

        with pytest.raises(TemplateError, match="render_template"):
            adapter.render_template(Path("/t/CMakeLists.in"), {})

    def test_unwritable_output(self, mock_file_adapter):
        mock_file_adapter.read_text.return_value = "x"
        mock_file_adapter.write_text.side_effect = FileSystemError("read-only")
        adapter = TemplateAdapter(file_adapter=mock_file_adapter)

        with pytest.raises(TemplateError) as exc_info:
            adapter.render_template(
                Path("/t/CMakeLists.in"), {}, output_path=Path("/ro/CMakeLists.txt")
            )

        assert exc_info.value.context["output_path"] == str(Path("/ro/CMakeLists.txt"))
