"""CLI command modules."""

import typer

from cmakebridge.cli.commands.build import register_commands as register_build_commands
from cmakebridge.cli.commands.manifest import (
    register_commands as register_manifest_commands,
)
from cmakebridge.cli.commands.status import register_commands as register_status_commands
from cmakebridge.cli.commands.toolchain import (
    register_commands as register_toolchain_commands,
)


def register_all_commands(app: typer.Typer) -> None:
    """Register all CLI commands with the main app.

    Args:
        app: The main Typer app
    """
    register_build_commands(app)
    register_manifest_commands(app)
    register_toolchain_commands(app)
    register_status_commands(app)
