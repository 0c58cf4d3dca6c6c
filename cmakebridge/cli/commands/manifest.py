"""Manifest inspection command for the cmakebridge CLI."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from cmakebridge.cli.decorators import handle_errors
from cmakebridge.cli.helpers.parameters import JsonOption
from cmakebridge.core.errors import ManifestMissingError
from cmakebridge.targets.manifest_store import (
    MANIFEST_KEYS,
    create_manifest_store,
    split_list,
)


@handle_errors
def manifest(
    path: Annotated[Path, typer.Argument(help="buildinfo_<BuildType>.output file")],
    json_output: JsonOption = False,
) -> None:
    """Parse and show a build manifest."""
    values = create_manifest_store().read_manifest(path)
    if values is None:
        raise ManifestMissingError(str(path))

    if json_output:
        print(json.dumps(values, indent=2))
        return

    table = Table(title=str(path), show_header=True, header_style="bold cyan")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Values")
    for key, value in values.items():
        style = "" if key in MANIFEST_KEYS else "dim"
        shown = value if key in ("sourcePath", "cppStandard") else "\n".join(split_list(value))
        table.add_row(key, shown or "[dim]-[/dim]", style=style)
    Console().print(table)


def register_commands(app: typer.Typer) -> None:
    """Register manifest commands with the main app."""
    app.command(name="manifest")(manifest)
