"""Adapters wrapping the file system, templates and the build tool."""

from .cmake_adapter import CMakeAdapter, create_cmake_adapter
from .file_adapter import FileSystemAdapter, create_file_adapter
from .template_adapter import TemplateAdapter, create_template_adapter


__all__ = [
    "CMakeAdapter",
    "FileSystemAdapter",
    "TemplateAdapter",
    "create_cmake_adapter",
    "create_file_adapter",
    "create_template_adapter",
]
