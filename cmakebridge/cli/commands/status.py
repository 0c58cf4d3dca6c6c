"""Status command for the cmakebridge CLI."""

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from cmakebridge.cli.app import AppContext
from cmakebridge.cli.decorators import handle_errors
from cmakebridge.cli.helpers.parameters import (
    ConfigurationOption,
    JsonOption,
    ModuleDirOption,
    PlatformOption,
    build_context,
)
from cmakebridge.targets.models import BuildTarget, Configuration
from cmakebridge.targets.orchestrator import create_build_orchestrator


def _collect_status(
    app_ctx: AppContext, target: BuildTarget, build_type: str, platform_supported: bool
) -> dict[str, Any]:
    orchestrator = create_build_orchestrator(settings=app_ctx.settings)
    paths = orchestrator.resolve_paths(target, build_type)
    marker = orchestrator.manifest_store.read_built_marker(paths.built_marker)

    source_exists = paths.source_descriptor.is_file()
    needs_configure = True
    if source_exists:
        needs_configure = orchestrator.needs_configure(paths)

    return {
        "target": target.target_name,
        "build_type": build_type,
        "platform_supported": platform_supported,
        "source_descriptor": str(paths.source_descriptor),
        "source_exists": source_exists,
        "build_dir": str(paths.build_dir),
        "manifest_file": str(paths.manifest_file),
        "manifest_exists": paths.manifest_file.is_file(),
        "built_marker": str(paths.built_marker),
        "built_at": marker.isoformat() if marker else None,
        "needs_configure": needs_configure,
        "failed_sentinel": str(paths.sentinel_file),
    }


@handle_errors
def status(
    ctx: typer.Context,
    target_name: Annotated[str, typer.Argument(help="CMake target name")],
    target_location: Annotated[
        str, typer.Argument(help="Source directory, relative to the module directory")
    ],
    module_dir: ModuleDirOption = Path("."),
    platform: PlatformOption = None,
    configuration: ConfigurationOption = Configuration.DEVELOPMENT,
    extra_args: Annotated[
        str,
        typer.Option("--extra-args", "-e", help="Arguments passed to the configure step"),
    ] = "",
    json_output: JsonOption = False,
) -> None:
    """Show resolved paths and whether the next build reconfigures."""
    app_ctx: AppContext = ctx.obj
    context = build_context(platform, configuration)
    target = BuildTarget.from_args(target_name, target_location, module_dir, extra_args)
    data = _collect_status(
        app_ctx, target, target.build_type_for(context), context.platform.is_supported
    )

    if json_output:
        print(json.dumps(data, indent=2))
        return

    table = Table(
        title=f"{target.target_name} ({data['build_type']})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Item", style="cyan", no_wrap=True)
    table.add_column("Value")
    for key, value in data.items():
        if isinstance(value, bool):
            shown = "[green]yes[/green]" if value else "[yellow]no[/yellow]"
        else:
            shown = str(value) if value is not None else "[dim]-[/dim]"
        table.add_row(key.replace("_", " ").capitalize(), shown)
    Console().print(table)


def register_commands(app: typer.Typer) -> None:
    """Register status commands with the main app."""
    app.command(name="status")(status)
