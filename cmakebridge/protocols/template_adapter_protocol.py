"""Protocol for descriptor template rendering."""

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class TemplateAdapterProtocol(Protocol):
    """Protocol for literal ``@PLACEHOLDER@`` substitution."""

    def render_template(
        self,
        template_path: Path,
        substitutions: Mapping[str, str],
        output_path: Path | None = None,
        append: str = "",
    ) -> str:
        """Render a template file, optionally writing the result.

        Args:
            template_path: Template file to read
            substitutions: Placeholder name (without ``@``) to value
            output_path: Where to write the rendered text, if given
            append: Text appended verbatim after substitution

        Returns:
            The rendered text

        Raises:
            TemplateError: If the template cannot be read or written
        """
        ...

    def render_string(self, template: str, substitutions: Mapping[str, str]) -> str:
        """Substitute placeholders in a template string."""
        ...
