"""Toolchain command for the cmakebridge CLI."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from cmakebridge.cli.app import AppContext
from cmakebridge.cli.decorators import handle_errors
from cmakebridge.cli.helpers.parameters import (
    ArchitectureOption,
    CompilerOption,
    ConfigurationOption,
    JsonOption,
    PlatformOption,
    SystemCompilerOption,
    build_context,
)
from cmakebridge.targets.models import CompilerFamily, Configuration
from cmakebridge.targets.toolchain import create_toolchain_synthesizer


@handle_errors
def toolchain(
    ctx: typer.Context,
    platform: PlatformOption = None,
    configuration: ConfigurationOption = Configuration.DEVELOPMENT,
    arch: ArchitectureOption = None,
    compiler: CompilerOption = CompilerFamily.DEFAULT,
    use_system_compiler: SystemCompilerOption = False,
    sdk_dir: Annotated[
        Path | None,
        typer.Option("--sdk-dir", help="Bundled clang toolchain root"),
    ] = None,
    json_output: JsonOption = False,
) -> None:
    """Show the generator and compilers selected for a build context."""
    app_ctx: AppContext = ctx.obj
    context = build_context(platform, configuration, arch, compiler, use_system_compiler)
    synthesizer = create_toolchain_synthesizer(sdk_dir=sdk_dir or app_ctx.settings.sdk_dir)
    descriptor = synthesizer.synthesize(context)

    if json_output:
        data = asdict(descriptor)
        data["generator_options"] = list(descriptor.generator_options)
        print(json.dumps(data, indent=2))
        return

    table = Table(
        title=f"Toolchain for {context.platform.value} {context.architecture.value}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("Generator", descriptor.generator_name or "[dim](cmake default)[/dim]")
    table.add_row("Options", "\n".join(descriptor.generator_options) or "[dim]-[/dim]")
    table.add_row("C compiler", descriptor.c_compiler or "[dim](cmake default)[/dim]")
    table.add_row("C++ compiler", descriptor.cpp_compiler or "[dim](cmake default)[/dim]")
    table.add_row("Linker", descriptor.linker or "[dim](cmake default)[/dim]")
    Console().print(table)


def register_commands(app: typer.Typer) -> None:
    """Register toolchain commands with the main app."""
    app.command(name="toolchain")(toolchain)
