"""Template adapter for descriptor template rendering.

Templates use CMake's ``configure_file`` placeholder style, ``@NAME@``, and
are substituted literally: no expressions, no escaping. Placeholders without
a value are left in place so CMake's own ``@VAR@`` references survive.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from cmakebridge.core.errors import FileSystemError
from cmakebridge.protocols.file_adapter_protocol import FileAdapterProtocol
from cmakebridge.protocols.template_adapter_protocol import TemplateAdapterProtocol
from cmakebridge.utils.error_utils import create_template_error


logger = logging.getLogger(__name__)


class TemplateAdapter:
    """Literal ``@PLACEHOLDER@`` template adapter implementation."""

    def __init__(self, file_adapter: FileAdapterProtocol | None = None):
        if file_adapter is None:
            from cmakebridge.adapters.file_adapter import create_file_adapter

            file_adapter = create_file_adapter()
        self.file_adapter = file_adapter

    def render_string(self, template: str, substitutions: Mapping[str, str]) -> str:
        """Substitute every ``@KEY@`` in ``template``."""
        for key, value in substitutions.items():
            template = template.replace(f"@{key}@", value)
        return template

    def render_template(
        self,
        template_path: Path,
        substitutions: Mapping[str, str],
        output_path: Path | None = None,
        append: str = "",
    ) -> str:
        """Render a template file and optionally write the result."""
        try:
            contents = self.file_adapter.read_text(template_path)
        except FileSystemError as e:
            error = create_template_error(
                template_path,
                "render_template",
                e,
                {"placeholders": sorted(substitutions)},
            )
            logger.error("Template not found: %s", template_path)
            raise error from e

        rendered = self.render_string(contents, substitutions) + append

        if output_path is not None:
            try:
                self.file_adapter.write_text(output_path, rendered)
            except FileSystemError as e:
                error = create_template_error(
                    template_path,
                    "render_template",
                    e,
                    {"output_path": str(output_path)},
                )
                logger.error("Cannot write rendered template to %s", output_path)
                raise error from e
            logger.debug("Rendered %s -> %s", template_path.name, output_path)

        return rendered


def create_template_adapter(
    file_adapter: FileAdapterProtocol | None = None,
) -> TemplateAdapterProtocol:
    """Factory function to create a TemplateAdapter instance."""
    return TemplateAdapter(file_adapter=file_adapter)
