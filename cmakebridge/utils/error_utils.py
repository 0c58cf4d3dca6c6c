"""Helpers for building consistently worded errors."""

from pathlib import Path
from typing import Any

from cmakebridge.core.errors import FileSystemError, TemplateError


def create_file_error(
    path: Path | str,
    operation: str,
    original_error: Exception,
    additional_context: dict[str, Any] | None = None,
) -> FileSystemError:
    """Create a FileSystemError describing a failed file operation.

    Args:
        path: Path the operation was applied to
        operation: Name of the operation (e.g. "read_text")
        original_error: The underlying OS error
        additional_context: Extra context to attach to the error

    Returns:
        FileSystemError ready to be raised
    """
    context: dict[str, Any] = {
        "file_path": str(path),
        "operation": operation,
        "error_type": type(original_error).__name__,
    }
    if additional_context:
        context.update(additional_context)
    message = f"File operation '{operation}' failed on '{path}': {original_error}"
    return FileSystemError(message, context)


def create_template_error(
    template: Path | str,
    operation: str,
    original_error: Exception,
    additional_context: dict[str, Any] | None = None,
) -> TemplateError:
    """Create a TemplateError describing a failed template operation."""
    context: dict[str, Any] = {
        "template": str(template),
        "operation": operation,
        "error_type": type(original_error).__name__,
    }
    if additional_context:
        context.update(additional_context)
    message = f"Template operation '{operation}' failed on '{template}': {original_error}"
    return TemplateError(message, context)
